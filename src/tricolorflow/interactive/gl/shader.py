# どこで: `src/tricolorflow/interactive/gl/shader.py`。
# 何を: 点スプライト描画と残像フェード用の GLSL プログラムを生成する。
# なぜ: シェーダ文字列を renderer から分離し、uniform 名の定義を 1 箇所に集めるため。

from __future__ import annotations

from typing import Any

_POINT_VERTEX_SHADER = """
#version 410
uniform mat4 projection;
uniform float point_size;

in vec3 in_vert;
in vec3 in_color;

out vec3 v_color;

void main() {
    gl_Position = projection * vec4(in_vert, 1.0);
    gl_PointSize = point_size;
    v_color = in_color;
}
"""

_POINT_FRAGMENT_SHADER = """
#version 410
uniform sampler2D sprite;
uniform float opacity;
uniform float alpha_test;

in vec3 v_color;

out vec4 frag_color;

void main() {
    vec4 texel = texture(sprite, gl_PointCoord);
    float alpha = texel.a * opacity;
    if (alpha < alpha_test) {
        discard;
    }
    frag_color = vec4(v_color * texel.rgb, alpha);
}
"""

_FADE_VERTEX_SHADER = """
#version 410
in vec2 in_pos;

void main() {
    gl_Position = vec4(in_pos, 0.0, 1.0);
}
"""

_FADE_FRAGMENT_SHADER = """
#version 410
uniform vec4 color;

out vec4 frag_color;

void main() {
    frag_color = color;
}
"""


class Shader:
    """ModernGL プログラムの生成関数をまとめる。"""

    @staticmethod
    def create_point_shader(ctx: Any) -> Any:
        """点スプライト用プログラムを返す（uniform: projection, point_size, sprite, opacity, alpha_test）。"""
        return ctx.program(
            vertex_shader=_POINT_VERTEX_SHADER,
            fragment_shader=_POINT_FRAGMENT_SHADER,
        )

    @staticmethod
    def create_fade_shader(ctx: Any) -> Any:
        """全画面に半透明の背景色を重ねるプログラムを返す（uniform: color）。"""
        return ctx.program(
            vertex_shader=_FADE_VERTEX_SHADER,
            fragment_shader=_FADE_FRAGMENT_SHADER,
        )
