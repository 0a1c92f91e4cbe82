"""
どこで: `src/tricolorflow/core/color.py`。
何を: RGB（0..1 float の 3 要素タプル）の変換・補間ユーティリティを提供する。
なぜ: 色を値型として扱い、毎フレームの色オブジェクト生成をなくすため。
"""

from __future__ import annotations

RGB = tuple[float, float, float]


def hex_to_rgb01(text: str) -> RGB:
    """`#RRGGBB` / `RRGGBB` / `#RGB` 形式の文字列を 0..1 float の RGB に変換して返す。

    Raises
    ------
    ValueError
        16 進カラー表記として解釈できない場合。
    """

    s = str(text).strip()
    if s.startswith("#"):
        s = s[1:]
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        raise ValueError(f"hex color は #RRGGBB 形式である必要がある: got={text!r}")
    try:
        r = int(s[0:2], 16)
        g = int(s[2:4], 16)
        b = int(s[4:6], 16)
    except ValueError as exc:
        raise ValueError(f"hex color を解釈できない: got={text!r}") from exc
    return rgb255_to_rgb01((r, g, b))


def rgb01_to_rgb255(rgb: RGB) -> tuple[int, int, int]:
    """0..1 float の RGB を 0..255 int の RGB に変換して返す。"""

    r, g, b = rgb
    out: list[int] = []
    for v in (r, g, b):
        fv = float(v)
        fv = 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv
        out.append(int(round(fv * 255.0)))
    return int(out[0]), int(out[1]), int(out[2])


def rgb255_to_rgb01(rgb: tuple[int, int, int]) -> RGB:
    """0..255 int の RGB を 0..1 float の RGB に変換して返す。"""

    r, g, b = rgb
    return float(r) / 255.0, float(g) / 255.0, float(b) / 255.0


def lerp_rgb(a: RGB, b: RGB, t: float) -> RGB:
    """a→b を t で線形補間した RGB を返す。

    Notes
    -----
    `(1-t)*a + t*b` の形で計算するため、t=0 で a、t=1 で b に厳密一致する。
    t は 0..1 にクランプする。
    """

    tf = float(t)
    tf = 0.0 if tf < 0.0 else 1.0 if tf > 1.0 else tf
    s = 1.0 - tf
    return (
        s * float(a[0]) + tf * float(b[0]),
        s * float(a[1]) + tf * float(b[1]),
        s * float(a[2]) + tf * float(b[2]),
    )


# 既定の三色（サフラン → 白 → 緑）。
SAFFRON: RGB = hex_to_rgb01("#FF9933")
WHITE: RGB = hex_to_rgb01("#FFFFFF")
GREEN: RGB = hex_to_rgb01("#138808")

__all__ = [
    "GREEN",
    "RGB",
    "SAFFRON",
    "WHITE",
    "hex_to_rgb01",
    "lerp_rgb",
    "rgb01_to_rgb255",
    "rgb255_to_rgb01",
]
