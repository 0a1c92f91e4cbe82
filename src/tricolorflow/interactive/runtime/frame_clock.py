# どこで: `src/tricolorflow/interactive/runtime/frame_clock.py`。
# 何を: ジェネレータに渡すフレーム時刻 `t` の生成規則を提供する。
# なぜ: 実時間と `time_scale` の掛け合わせを 1 箇所に置き、描画サブシステムから切り離すため。

from __future__ import annotations

import time


class RealTimeClock:
    """実時間ベースのフレーム時計。

    Notes
    -----
    `t` は `perf_counter()` の差分（秒）に `time_scale` を掛けた値。
    """

    def __init__(self, *, start_time: float, time_scale: float = 1.0) -> None:
        self._start_time = float(start_time)
        self._time_scale = float(time_scale)

    def elapsed(self) -> float:
        """開始からの経過秒（スケール前）を返す。"""

        return float(time.perf_counter() - self._start_time)

    def t(self) -> float:
        """現在のフレーム時刻 `t` を返す。"""

        return self.elapsed() * self._time_scale

