# どこで: `src/tricolorflow/interactive/runtime/field_window_system.py`。
# 何を: 毎フレーム曲線場を生成し、描画ウィンドウへ点群として描くサブシステムを提供する。
# なぜ: `api/runner.py` の `run()` を「配線」に寄せ、フレーム処理の責務を独立させるため。

from __future__ import annotations

import logging
import time
from pathlib import Path

from pyglet.window import key

from tricolorflow.core.curve_field import LineFrame, allocate_field_buffers, generate_field
from tricolorflow.core.field_config import FieldConfig
from tricolorflow.core.noise import Noise2D
from tricolorflow.export.svg import default_svg_output_path, export_svg
from tricolorflow.interactive.draw_window import create_draw_window
from tricolorflow.interactive.gl.draw_renderer import PointRenderer
from tricolorflow.interactive.render_settings import RenderSettings
from tricolorflow.interactive.runtime.frame_clock import RealTimeClock
from tricolorflow.interactive.runtime.perf import PerfCollector

_logger = logging.getLogger(__name__)


class FieldWindowSystem:
    """曲線場の描画（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        config: FieldConfig,
        *,
        settings: RenderSettings,
        noise: Noise2D | None = None,
    ) -> None:
        """描画用の window/renderer とスクラッチバッファを初期化する。"""

        self._config = config
        self._settings = settings
        self._noise = noise

        # 線ごとのバッファはフレームをまたいで使い回す。
        self._buffers = allocate_field_buffers(config)
        self._last_frames: list[LineFrame] = []

        self.window = create_draw_window(settings)
        self._renderer = PointRenderer(self.window, settings)
        self.window.push_handlers(on_key_press=self._on_key_press)

        self._clock = RealTimeClock(start_time=time.perf_counter(), time_scale=settings.time_scale)
        self._perf = PerfCollector.from_env()

    def _on_key_press(self, symbol: int, _modifiers: int) -> None:
        if symbol != key.S:
            return
        try:
            path = self.save_svg()
        except Exception:
            _logger.exception("Failed to save SVG")
            return
        print(f"Saved SVG: {path}")

    def save_svg(self, path: str | Path | None = None) -> Path:
        """最後に生成したフレームを SVG として保存し、保存先パスを返す。"""
        return export_svg(
            self._last_frames,
            default_svg_output_path() if path is None else path,
            canvas_size=self._settings.canvas_size,
            point_radius=self._settings.point_size / 2.0,
            background_color=self._settings.background_color,
        )

    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self.window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return int(w), int(h)
        return int(self.window.width), int(self.window.height)

    def draw_frame(self) -> None:
        """1 フレーム分の生成と描画を行う（`flip()` は呼ばない）。"""

        perf = self._perf
        with perf.frame():
            t = self._clock.t()

            # --- 1) 全ての線を生成（スクラッチバッファへ上書き） ---
            with perf.section("generate"):
                frames = generate_field(t, self._config, noise=self._noise, buffers=self._buffers)
            self._last_frames = frames

            # --- 2) 残像フェード + 点群描画（オフスクリーン） ---
            renderer = self._renderer
            renderer.begin_frame()
            renderer.fade(self._settings.background_color, self._settings.trail_alpha)
            with perf.section("render"):
                renderer.render_lines(frames)

            # --- 3) screen へ反映 ---
            fb_w, fb_h = self._framebuffer_size()
            renderer.present(fb_w, fb_h)

            if perf.enabled and perf.gpu_finish:
                with perf.section("gpu_finish"):
                    renderer.finish()

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        try:
            # renderer が保持している GPU リソースを破棄してから window を閉じる。
            self._renderer.release()
        finally:
            self.window.close()
