# どこで: `src/tricolorflow/core/color_zones.py`。
# 何を: 正規化曲線パラメータ tc∈[0,1] を 5 つの帯に分け、帯ごとの色規則（単色/線形補間）を提供する。
# なぜ: 三色グラデーションの境界定義と補間を 1 箇所にまとめ、単体テストしやすくするため。

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from tricolorflow.core.color import GREEN, RGB, SAFFRON, WHITE, lerp_rgb

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ColorZones:
    """三色グラデーションの帯幅と色。

    Parameters
    ----------
    left_solid : float
        color1 単色帯の幅。
    left_blend : float
        color1→color2 補間帯の幅。
    center_white : float
        color2 単色帯の幅。
    right_blend : float
        color2→color3 補間帯の幅。
    color1, color2, color3 : RGB
        0..1 float の RGB。既定はサフラン / 白 / 緑。

    Notes
    -----
    5 本目の帯（color3 単色）の幅は `1 - (4 帯の合計)` から導出し、0 未満は 0 にクランプする。
    """

    left_solid: float = 0.28
    left_blend: float = 0.15
    center_white: float = 0.02
    right_blend: float = 0.15
    color1: RGB = SAFFRON
    color2: RGB = WHITE
    color3: RGB = GREEN

    def __post_init__(self) -> None:
        widths = (self.left_solid, self.left_blend, self.center_white, self.right_blend)
        for name, w in zip(("left_solid", "left_blend", "center_white", "right_blend"), widths):
            wf = float(w)
            if not np.isfinite(wf) or wf < 0.0:
                raise ValueError(f"{name} は 0 以上の有限値である必要がある: got={w!r}")
            object.__setattr__(self, name, wf)
        for name in ("color1", "color2", "color3"):
            object.__setattr__(self, name, _coerce_rgb(getattr(self, name), key=name))

        total = sum(float(w) for w in widths)
        if total > 1.0:
            _logger.warning(
                "color zone widths sum to %.3f (> 1); right_solid is clamped to 0",
                total,
            )

    @property
    def right_solid(self) -> float:
        """導出される color3 単色帯の幅（>= 0）を返す。"""

        total = self.left_solid + self.left_blend + self.center_white + self.right_blend
        return max(0.0, 1.0 - total)

    @property
    def thresholds(self) -> tuple[float, float, float, float]:
        """帯境界 (Z_A, Z_B, Z_C, Z_D) を返す。"""

        z_a = self.left_solid
        z_b = z_a + self.left_blend
        z_c = z_b + self.center_white
        z_d = z_c + self.right_blend
        return z_a, z_b, z_c, z_d

    def color_at(self, tc: float) -> RGB:
        """正規化位置 tc の色を返す。"""

        z_a, z_b, z_c, z_d = self.thresholds
        t = float(tc)
        if t <= z_a:
            return self.color1
        if t <= z_b:
            return lerp_rgb(self.color1, self.color2, _band_fraction(t, z_a, z_b))
        if t <= z_c:
            return self.color2
        if t <= z_d:
            return lerp_rgb(self.color2, self.color3, _band_fraction(t, z_c, z_d))
        return self.color3

    def gradient(self, segment_count: int) -> np.ndarray:
        """`segment_count` 点ぶんの色配列（float64, shape (N,3), 読み取り専用）を返す。

        Notes
        -----
        色は線 index と時刻に依存しないため、(帯設定, 点数) 単位でキャッシュする。
        """

        return _gradient_cached(self, int(segment_count))


def _coerce_rgb(value: object, *, key: str) -> RGB:
    try:
        r, g, b = value  # type: ignore[misc]
    except Exception as exc:
        raise ValueError(f"{key} は長さ 3 の RGB である必要がある: got={value!r}") from exc
    out = (float(r), float(g), float(b))
    for v in out:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"{key} の各成分は 0..1 である必要がある: got={value!r}")
    return out


def _band_fraction(t: float, lo: float, hi: float) -> float:
    """補間帯 [lo, hi] 内の位置を 0..1 で返す。幅 0 の帯では 1 を返す。"""

    width = hi - lo
    if width <= 0.0:
        return 1.0
    f = (t - lo) / width
    return 0.0 if f < 0.0 else 1.0 if f > 1.0 else f


def normalized_positions(segment_count: int) -> np.ndarray:
    """各サンプルの正規化位置 tc = j/(N-1) を返す（N=1 のときは [0.0]）。"""

    n = int(segment_count)
    if n < 1:
        raise ValueError(f"segment_count は 1 以上である必要がある: got={segment_count!r}")
    if n == 1:
        return np.zeros((1,), dtype=np.float64)
    return np.arange(n, dtype=np.float64) / float(n - 1)


@lru_cache(maxsize=32)
def _gradient_cached(zones: ColorZones, segment_count: int) -> np.ndarray:
    tc = normalized_positions(segment_count)
    out = np.empty((tc.shape[0], 3), dtype=np.float64)
    for j, t in enumerate(tc):
        out[j] = zones.color_at(float(t))
    out.setflags(write=False)
    return out


__all__ = ["ColorZones", "normalized_positions"]
