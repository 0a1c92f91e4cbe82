# どこで: `src/tricolorflow/interactive/runtime/window_loop.py`。
# 何を: pyglet の app loop（`pyglet.app.run()`）で 1 枚の描画ウィンドウを一定 fps で回すランナーを提供する。
# なぜ: OS 依存のイベント配送を pyglet に任せ、フレーム呼び出しを同期・非再入に保つため。

from __future__ import annotations

from typing import Any, Callable

import pyglet


class FrameLoop:
    """1 つのウィンドウを一定間隔で再描画するループ。

    `draw_frame()` はウィンドウの back buffer へ描画するだけにし、`flip()` は pyglet が行う。
    ウィンドウを閉じるとループが止まる（進行中の処理は持たないので中断処理も無い）。
    """

    def __init__(
        self,
        window: Any,
        draw_frame: Callable[[], None],
        *,
        fps: float,
    ) -> None:
        """ループを初期化する。

        Parameters
        ----------
        window : pyglet.window.Window
            描画対象のウィンドウ。
        draw_frame : Callable[[], None]
            1 フレーム分の描画処理。
        fps : float
            目標フレームレート。`<=0` の場合はスロットリングしない。
        """

        self._window = window
        self._draw_frame = draw_frame
        self._fps = float(fps)

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        window = self._window

        def request_exit(*_: object) -> None:
            # pyglet の on_close から呼ばれるコールバックは引数が来る場合があるため *args を受ける。
            pyglet.app.exit()

        window.push_handlers(on_close=request_exit)
        window.push_handlers(on_draw=self._draw_frame)

        def draw(dt: float) -> None:
            # 閉じられたウィンドウへ draw すると例外になり得るため、開いているときだけ描く。
            if window not in pyglet.app.windows:
                return
            window.draw(dt)

        if self._fps <= 0:
            pyglet.clock.schedule(draw)
        else:
            pyglet.clock.schedule_interval(draw, 1.0 / self._fps)

        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(draw)
