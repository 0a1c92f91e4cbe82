"""
どこで: `src/tricolorflow/core/curve_field.py`。
何を: 時刻 t と線 index i から、1 本の流れる線（点位置・点色・線の不透明度）を生成する。
なぜ: 描画バックエンドから切り離した純関数として、毎フレームの曲線生成/センタリング/色付けを担うため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from tricolorflow.core.catmull_rom import CatmullRomCurve
from tricolorflow.core.field_config import FieldConfig
from tricolorflow.core.noise import Noise2D, PerlinNoise2D

# 中間制御点の数（左右アンカーと合わせて 5 点）。
MIDPOINT_COUNT = 3

_DEFAULT_NOISE = PerlinNoise2D(seed=0)


@dataclass(frozen=True, slots=True, eq=False)
class LineBuffers:
    """1 本の線のスクラッチバッファ（呼び出し側が所有し、毎フレーム上書きして再利用する）。

    Parameters
    ----------
    positions : np.ndarray
        float64 型 shape (N, 3)。
    colors : np.ndarray
        float64 型 shape (N, 3)。
    """

    positions: np.ndarray
    colors: np.ndarray

    def __post_init__(self) -> None:
        for name in ("positions", "colors"):
            arr = getattr(self, name)
            if not isinstance(arr, np.ndarray) or arr.ndim != 2 or arr.shape[1] != 3:
                raise ValueError(f"{name} は shape (N,3) の ndarray である必要がある")
            if arr.dtype != np.float64:
                raise ValueError(f"{name} は float64 である必要がある")
        if self.positions.shape != self.colors.shape:
            raise ValueError("positions と colors は同じ shape である必要がある")

    @classmethod
    def allocate(cls, segment_count: int) -> "LineBuffers":
        """`segment_count` 点ぶんのゼロ初期化バッファを確保して返す。"""

        n = int(segment_count)
        return cls(
            positions=np.zeros((n, 3), dtype=np.float64),
            colors=np.zeros((n, 3), dtype=np.float64),
        )

    @property
    def segment_count(self) -> int:
        return int(self.positions.shape[0])


@dataclass(frozen=True, slots=True, eq=False)
class LineFrame:
    """1 フレーム分の線の生成結果。

    Notes
    -----
    `out` を渡して生成した場合、positions/colors はそのバッファそのもの（次の生成で上書きされる）。
    """

    index: int
    positions: np.ndarray
    colors: np.ndarray
    opacity: float


def _finite_or_zero(values: np.ndarray) -> np.ndarray:
    return np.where(np.isfinite(values), values, 0.0)


def _sample_noise(noise: Noise2D, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    sample = getattr(noise, "sample", None)
    if callable(sample):
        return np.asarray(sample(xs, ys), dtype=np.float64)
    return np.asarray([float(noise(float(x), float(y))) for x, y in zip(xs, ys)], dtype=np.float64)


def control_points(
    i: int,
    t: float,
    config: FieldConfig,
    *,
    noise: Noise2D | None = None,
) -> np.ndarray:
    """線 i・時刻 t の制御点 shape (5, 3) を返す（左アンカー, 中間 3 点, 右アンカー）。"""

    noise_fn = _DEFAULT_NOISE if noise is None else noise
    amp = config.amplitude
    line = int(i)
    tf = float(t)

    amplitude = amp.base_amplitude + line * amp.amplitude_step
    phase_shift = line * amp.phase_step
    vertical_offset = math.sin(tf * amp.offset_speed + phase_shift) * amp.offset_scale
    horizontal_jitter = math.sin(tf * amp.jitter_speed + phase_shift) * amp.jitter_scale

    base_y = config.base_y + vertical_offset
    pts = np.zeros((MIDPOINT_COUNT + 2, 3), dtype=np.float64)
    pts[0, 0] = config.left_x + horizontal_jitter
    pts[0, 1] = base_y
    pts[-1, 0] = config.right_x + horizontal_jitter
    pts[-1, 1] = base_y

    k = np.arange(MIDPOINT_COUNT, dtype=np.float64)
    fractions = (k + 1.0) / float(MIDPOINT_COUNT + 1)
    noise_x = k * (amp.noise_freq_base + line * amp.noise_freq_step)
    noise_y = np.full_like(k, tf + line * amp.noise_time_step)
    # 非有限のノイズ値は変位 0 として扱う。
    displacement = _finite_or_zero(_sample_noise(noise_fn, noise_x, noise_y))

    pts[1:-1, 0] = config.left_x + fractions * config.span + horizontal_jitter
    pts[1:-1, 1] = base_y + displacement * amplitude
    return pts


def line_opacity(i: int, t: float, center_x: float, config: FieldConfig) -> float:
    """中央サンプルの x から、線全体の不透明度を返す。"""

    op = config.opacity
    cx = float(center_x)
    if not math.isfinite(cx):
        cx = 0.0
    fade = 1.0 - min(abs(cx) / config.max_dist, 1.0)
    return float(
        op.base_opacity
        + op.oscillation_amplitude
        * math.sin(float(t) * op.oscillation_speed + int(i) * op.phase_step)
        * fade
    )


def generate_line(
    i: int,
    t: float,
    config: FieldConfig,
    *,
    noise: Noise2D | None = None,
    out: LineBuffers | None = None,
) -> LineFrame:
    """線 i の時刻 t における点列・色・不透明度を生成する。

    Parameters
    ----------
    i : int
        線 index（`0 <= i < config.line_count`）。
    t : float
        スケール済み時刻。
    config : FieldConfig
        ジェネレータ設定。
    noise : Noise2D or None, optional
        `(x, y) -> float` のノイズ場。None の場合は seed=0 の Perlin ノイズ。
    out : LineBuffers or None, optional
        書き込み先バッファ。None の場合は新規に確保する。

    Returns
    -------
    LineFrame
        y 平均が `config.base_y` にそろった点列と、tc に応じた色、線の不透明度。

    Raises
    ------
    ValueError
        i が範囲外、または out の点数が segment_count と一致しない場合。
    """

    line = int(i)
    if not 0 <= line < config.line_count:
        raise ValueError(f"line index が範囲外: got={i!r}, line_count={config.line_count}")
    n = config.segment_count
    if out is None:
        out = LineBuffers.allocate(n)
    elif out.segment_count != n:
        raise ValueError(
            f"out の点数が segment_count と一致しない: got={out.segment_count}, expected={n}"
        )

    pts = control_points(line, t, config, noise=noise)
    curve = CatmullRomCurve(pts, curve_type=config.curve_type)
    sampled = curve.get_points(n - 1)

    # 自動センタリング: y 平均を base_y へ移す。
    shift_y = config.base_y - float(np.mean(sampled[:, 1]))

    positions = out.positions
    positions[:, 0] = sampled[:, 0]
    positions[:, 1] = sampled[:, 1] + shift_y
    positions[:, 2] = 0.0

    out.colors[:] = config.zones.gradient(n)

    center_x = float(sampled[n // 2, 0])
    opacity = line_opacity(line, t, center_x, config)
    return LineFrame(index=line, positions=positions, colors=out.colors, opacity=opacity)


def generate_field(
    t: float,
    config: FieldConfig,
    *,
    noise: Noise2D | None = None,
    buffers: list[LineBuffers] | None = None,
) -> list[LineFrame]:
    """全ての線について `generate_line` を index 順に実行した結果を返す。"""

    if buffers is not None and len(buffers) != config.line_count:
        raise ValueError(
            f"buffers の本数が line_count と一致しない: got={len(buffers)}, expected={config.line_count}"
        )
    frames: list[LineFrame] = []
    for i in range(config.line_count):
        out = buffers[i] if buffers is not None else None
        frames.append(generate_line(i, t, config, noise=noise, out=out))
    return frames


def allocate_field_buffers(config: FieldConfig) -> list[LineBuffers]:
    """全ての線ぶんのスクラッチバッファを確保して返す。"""

    return [LineBuffers.allocate(config.segment_count) for _ in range(config.line_count)]


__all__ = [
    "LineBuffers",
    "LineFrame",
    "MIDPOINT_COUNT",
    "allocate_field_buffers",
    "control_points",
    "generate_field",
    "generate_line",
    "line_opacity",
]
