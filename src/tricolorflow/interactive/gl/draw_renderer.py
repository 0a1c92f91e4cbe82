# どこで: `src/tricolorflow/interactive/gl/draw_renderer.py`。
# 何を: ライブ描画用の ModernGL レンダラー（点スプライト + 加算合成 + 残像フェード）をカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・点群転送を `run` から分離し、責務を明確にするため。

from __future__ import annotations

from collections.abc import Sequence

import moderngl
import numpy as np
from pyglet.window import Window

from tricolorflow.core.curve_field import LineFrame
from tricolorflow.interactive.gl import utils as render_utils
from tricolorflow.interactive.gl.point_mesh import PointMesh
from tricolorflow.interactive.gl.point_sprite import build_circle_sprite
from tricolorflow.interactive.gl.shader import Shader
from tricolorflow.interactive.render_settings import RenderSettings

# 全画面を覆う triangle strip。
_FULLSCREEN_QUAD = np.array(
    [
        [-1.0, -1.0],
        [1.0, -1.0],
        [-1.0, 1.0],
        [1.0, 1.0],
    ],
    dtype="f4",
)

_SPRITE_TEXTURE_UNIT = 0


class PointRenderer:
    """線ごとの点群を加算合成で描くレンダラー。"""

    def __init__(self, window: Window, settings: RenderSettings) -> None:
        window.switch_to()
        self.ctx = moderngl.create_context(require=410)
        self._settings = settings

        self.program = Shader.create_point_shader(self.ctx)
        self._fade_program = Shader.create_fade_shader(self.ctx)

        canvas_w, canvas_h = settings.canvas_size
        # 射影行列はキャンバス寸法にのみ依存するため初期化時に一度設定する。
        projection = render_utils.build_projection(float(canvas_w), float(canvas_h))
        self.program["projection"].write(projection.tobytes())
        self.program["point_size"].value = float(settings.point_size * settings.render_scale)
        self.program["alpha_test"].value = float(settings.alpha_test)
        self.program["sprite"].value = _SPRITE_TEXTURE_UNIT

        sprite = build_circle_sprite()
        self._sprite = self.ctx.texture(
            (sprite.shape[1], sprite.shape[0]), 4, np.ascontiguousarray(sprite).tobytes()
        )
        self._sprite.filter = (moderngl.LINEAR, moderngl.LINEAR)

        self._fade_vbo = self.ctx.buffer(_FULLSCREEN_QUAD.tobytes())
        self._fade_vao = self.ctx.vertex_array(
            self._fade_program, [(self._fade_vbo, "2f", "in_pos")]
        )

        # 残像を残すため、フレームをまたいで内容を保持するオフスクリーンに描いてから screen へコピーする。
        getter = getattr(window, "get_framebuffer_size", None)
        fb_w, fb_h = getter() if callable(getter) else settings.window_size
        self._accum_texture = self.ctx.texture((int(fb_w), int(fb_h)), 4)
        self._accum = self.ctx.framebuffer(color_attachments=[self._accum_texture])
        self._accum.use()
        self.ctx.clear(*settings.background_color, 1.0)

        # 線ごとに 1 つの PointMesh を持ち、毎フレーム中身だけ差し替える。
        self._meshes: list[PointMesh] = []

    def begin_frame(self) -> None:
        """オフスクリーンへの描画を開始する。"""
        self._accum.use()

    def present(self, width: int, height: int) -> None:
        """オフスクリーンの内容を screen へコピーする。"""
        screen = self.ctx.screen
        screen.use()
        screen.viewport = (0, 0, int(width), int(height))
        self.ctx.copy_framebuffer(screen, self._accum)

    def clear(self, color: tuple[float, float, float]) -> None:
        """背景色で完全にクリアする。"""
        self.ctx.clear(*color, 1.0)

    def fade(self, color: tuple[float, float, float], alpha: float) -> None:
        """背景色を alpha で重ね、前フレームを薄くする（残像）。"""
        a = float(alpha)
        if a >= 1.0:
            self.clear(color)
            return
        self.ctx.enable(moderngl.BLEND)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA
        self._fade_program["color"].value = (*color, a)
        self._fade_vao.render(mode=moderngl.TRIANGLE_STRIP)

    def _mesh(self, index: int) -> PointMesh:
        while len(self._meshes) <= index:
            self._meshes.append(PointMesh(self.ctx, self.program))
        return self._meshes[index]

    def render_lines(self, frames: Sequence[LineFrame]) -> int:
        """線フレーム列を点スプライトとして描画し、描画した頂点数を返す。"""
        self.ctx.enable(moderngl.BLEND | moderngl.PROGRAM_POINT_SIZE)
        # 加算合成（src * alpha + dst）。
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE
        self._sprite.use(location=_SPRITE_TEXTURE_UNIT)

        vertices = 0
        for slot, frame in enumerate(frames):
            mesh = self._mesh(slot)
            mesh.upload(frame.positions, frame.colors)
            if mesh.vertex_count == 0:
                continue
            self.program["opacity"].value = float(frame.opacity)
            mesh.vao.render(mode=moderngl.POINTS, vertices=mesh.vertex_count)
            vertices += mesh.vertex_count
        return vertices

    def release(self) -> None:
        """GPU リソースを解放する。"""
        for mesh in self._meshes:
            mesh.release()
        self._meshes.clear()
        self._fade_vao.release()
        self._fade_vbo.release()
        self._accum.release()
        self._accum_texture.release()
        self._sprite.release()
        self._fade_program.release()
        self.program.release()
        self.ctx.release()

    def finish(self) -> None:
        """GPU の完了を待つ（計測用）。"""
        self.ctx.finish()
