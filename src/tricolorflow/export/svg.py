"""
どこで: `src/tricolorflow/export/svg.py`。
何を: 生成済みの 1 フレーム（線ごとの点列・色・不透明度）を SVG として保存する関数を提供する。
なぜ: GL なしで結果を確認・保存できる最小の headless export を用意するため。
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import numpy as np

from tricolorflow.core.color import RGB, rgb01_to_rgb255
from tricolorflow.core.curve_field import LineFrame
from tricolorflow.core.runtime_config import output_root_dir

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _rgb01_to_hex(rgb01: RGB) -> str:
    """0..1 float RGB を #RRGGBB に変換して返す。"""
    r, g, b = rgb01_to_rgb255(rgb01)
    return f"#{r:02X}{g:02X}{b:02X}"


def default_svg_output_path(*, stem: str | None = None) -> Path:
    """SVG の既定保存パス `{output_root}/svg/{stem}.svg` を返す。

    stem 未指定時は `tricolorflow_YYYYmmdd_HHMMSS`。
    """

    name = stem if stem else datetime.now().strftime("tricolorflow_%Y%m%d_%H%M%S")
    return output_root_dir() / "svg" / f"{name}.svg"


def export_svg(
    frames: Sequence[LineFrame],
    path: str | Path,
    *,
    canvas_size: tuple[int, int],
    point_radius: float = 1.5,
    background_color: RGB | None = (0.0, 0.0, 0.0),
) -> Path:
    """線フレーム列を SVG として保存する。

    Parameters
    ----------
    frames : Sequence[LineFrame]
        `generate_field` の結果。
    path : str or Path
        出力先パス。親ディレクトリは自動作成する。
    canvas_size : tuple[int, int]
        キャンバス寸法。座標はキャンバス中心原点・y 上向きから SVG 座標へ変換する。
    point_radius : float, optional
        各点の円の半径。
    background_color : RGB or None, optional
        背景矩形の色。None の場合は背景を描かない。

    Returns
    -------
    Path
        保存先パス。
    """
    _path = Path(path)
    if canvas_size is None:
        raise ValueError("canvas_size を指定する必要がある")
    canvas_w, canvas_h = canvas_size
    if canvas_w <= 0 or canvas_h <= 0:
        raise ValueError("canvas_size は正の値である必要がある")

    half_w = float(canvas_w) / 2.0
    half_h = float(canvas_h) / 2.0
    radius = _fmt(point_radius)

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {int(canvas_w)} {int(canvas_h)}" '
            f'width="{int(canvas_w)}" height="{int(canvas_h)}">'
        )
    )
    if background_color is not None:
        lines.append(
            f'  <rect width="100%" height="100%" fill="{_rgb01_to_hex(background_color)}" />'
        )

    for frame in frames:
        # SVG の opacity は 0..1 に収める（加算合成の強調分は表現しない）。
        opacity = min(max(float(frame.opacity), 0.0), 1.0)
        lines.append(f'  <g data-line="{int(frame.index)}" opacity="{_fmt(opacity)}">')
        positions = np.asarray(frame.positions, dtype=np.float64)
        colors = np.asarray(frame.colors, dtype=np.float64)
        for (x, y, _z), rgb in zip(positions, colors):
            cx = _fmt(x + half_w)
            cy = _fmt(half_h - y)
            fill = _rgb01_to_hex((float(rgb[0]), float(rgb[1]), float(rgb[2])))
            lines.append(f'    <circle cx="{cx}" cy="{cy}" r="{radius}" fill="{fill}" />')
        lines.append("  </g>")

    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")

    return _path


__all__ = ["default_svg_output_path", "export_svg"]
