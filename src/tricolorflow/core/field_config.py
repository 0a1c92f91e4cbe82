# どこで: `src/tricolorflow/core/field_config.py`。
# 何を: 曲線場ジェネレータへ明示的に渡す設定（線本数・点数・水平範囲・色帯・振幅/不透明度パラメータ）を定義する。
# なぜ: 共有グローバル状態をなくし、同じ設定・同じ (i, t) なら同じ結果になるようにするため。

from __future__ import annotations

import math
from dataclasses import dataclass, field

from tricolorflow.core.catmull_rom import CURVE_TYPES
from tricolorflow.core.color_zones import ColorZones

DEFAULT_CANVAS_SIZE = (1080, 1920)

# maxDist = canvas_width / MAX_DIST_DIVISOR。
MAX_DIST_DIVISOR = 0.5


@dataclass(frozen=True, slots=True)
class AmplitudeParams:
    """線ごとのアニメーション係数。

    amplitude = base_amplitude + i * amplitude_step
    phase = i * phase_step
    vertical_offset = sin(offset_speed * t + phase) * offset_scale
    horizontal_jitter = sin(jitter_speed * t + phase) * jitter_scale
    midpoint y += noise2D(k * (noise_freq_base + i * noise_freq_step), t + i * noise_time_step) * amplitude
    """

    base_amplitude: float = 200.0
    amplitude_step: float = 23.0
    phase_step: float = 0.2
    offset_scale: float = 12.0
    offset_speed: float = 2.0
    jitter_scale: float = 5.0
    jitter_speed: float = 1.5
    noise_freq_base: float = 0.4
    noise_freq_step: float = 0.05
    noise_time_step: float = 0.07


@dataclass(frozen=True, slots=True)
class OpacityParams:
    """線全体の不透明度の揺らぎ。

    opacity = base_opacity + oscillation_amplitude * sin(oscillation_speed * t + i * phase_step) * fade
    """

    base_opacity: float = 0.9
    oscillation_amplitude: float = 0.35
    oscillation_speed: float = 4.0
    phase_step: float = 0.4


@dataclass(frozen=True, slots=True)
class FieldConfig:
    """曲線場ジェネレータの設定。

    Parameters
    ----------
    line_count : int
        線の本数。
    segment_count : int
        1 本あたりのサンプル点数。
    left_x, right_x : float
        制御点を並べる水平範囲（キャンバス中心原点）。
    max_dist : float
        不透明度フェードで |x| を正規化する距離。
    base_y : float
        自動センタリング後の y 平均値。
    zones : ColorZones
        三色グラデーションの帯設定。
    amplitude : AmplitudeParams
        振幅・位相・ノイズ係数。
    opacity : OpacityParams
        不透明度の揺らぎ係数。
    curve_type : str
        Catmull-Rom の種類。
    """

    line_count: int = 30
    segment_count: int = 100
    left_x: float = -DEFAULT_CANVAS_SIZE[0] / 2
    right_x: float = DEFAULT_CANVAS_SIZE[0] / 2
    max_dist: float = DEFAULT_CANVAS_SIZE[0] / MAX_DIST_DIVISOR
    base_y: float = 0.0
    zones: ColorZones = field(default_factory=ColorZones)
    amplitude: AmplitudeParams = field(default_factory=AmplitudeParams)
    opacity: OpacityParams = field(default_factory=OpacityParams)
    curve_type: str = "centripetal"

    def __post_init__(self) -> None:
        if int(self.line_count) < 0:
            raise ValueError(f"line_count は 0 以上である必要がある: got={self.line_count!r}")
        if int(self.segment_count) < 1:
            raise ValueError(f"segment_count は 1 以上である必要がある: got={self.segment_count!r}")
        for name in ("left_x", "right_x", "max_dist", "base_y"):
            v = float(getattr(self, name))
            if not math.isfinite(v):
                raise ValueError(f"{name} は有限値である必要がある: got={v!r}")
            object.__setattr__(self, name, v)
        if self.left_x >= self.right_x:
            raise ValueError(
                f"left_x < right_x である必要がある: got=({self.left_x}, {self.right_x})"
            )
        if self.max_dist <= 0.0:
            raise ValueError(f"max_dist は正の値である必要がある: got={self.max_dist!r}")
        if self.curve_type not in CURVE_TYPES:
            raise ValueError(f"未対応の curve_type: {self.curve_type!r}")
        object.__setattr__(self, "line_count", int(self.line_count))
        object.__setattr__(self, "segment_count", int(self.segment_count))

    @classmethod
    def from_canvas(
        cls,
        width: float,
        height: float | None = None,
        **overrides: object,
    ) -> "FieldConfig":
        """キャンバス幅から水平範囲と max_dist を導出した設定を返す。

        Notes
        -----
        水平範囲は `[-width/2, width/2]`、`max_dist = width / 0.5`。
        `overrides` に left_x / right_x / max_dist を渡した場合はそちらを優先する。
        height は座標系（中心原点）の説明用で、現在の導出には使わない。
        """

        w = float(width)
        if w <= 0:
            raise ValueError(f"canvas width は正の値である必要がある: got={width!r}")
        if height is not None and float(height) <= 0:
            raise ValueError(f"canvas height は正の値である必要がある: got={height!r}")
        kwargs: dict[str, object] = {
            "left_x": -w / 2.0,
            "right_x": w / 2.0,
            "max_dist": w / MAX_DIST_DIVISOR,
        }
        kwargs.update(overrides)
        return cls(**kwargs)  # type: ignore[arg-type]

    @property
    def span(self) -> float:
        """水平範囲の幅を返す。"""

        return self.right_x - self.left_x


__all__ = [
    "AmplitudeParams",
    "DEFAULT_CANVAS_SIZE",
    "FieldConfig",
    "MAX_DIST_DIVISOR",
    "OpacityParams",
]
