# どこで: `src/shapegrid/interactive/gl/shader.py`。
# 何を: 太さ付きライン描画用の GLSL プログラムを生成する。
# なぜ: GL_LINE_STRIP の線幅をドライバ依存にせず、ジオメトリシェーダで四角形へ展開するため。

from __future__ import annotations

from typing import Any

_VERTEX_SHADER = """
#version 410
uniform mat4 projection;
in vec2 in_vert;
void main() {
    gl_Position = projection * vec4(in_vert, 0.0, 1.0);
}
"""

# 線分ごとに法線方向へ line_thickness/2 だけ広げた四角形を出力する（clip 空間）。
_GEOMETRY_SHADER = """
#version 410
layout(lines) in;
layout(triangle_strip, max_vertices = 4) out;
uniform float line_thickness;
void main() {
    vec4 p0 = gl_in[0].gl_Position;
    vec4 p1 = gl_in[1].gl_Position;
    vec2 dir = p1.xy - p0.xy;
    float len = length(dir);
    if (len < 1e-8) {
        return;
    }
    vec2 normal = vec2(-dir.y, dir.x) / len * (line_thickness * 0.5);
    gl_Position = vec4(p0.xy + normal, p0.zw); EmitVertex();
    gl_Position = vec4(p0.xy - normal, p0.zw); EmitVertex();
    gl_Position = vec4(p1.xy + normal, p1.zw); EmitVertex();
    gl_Position = vec4(p1.xy - normal, p1.zw); EmitVertex();
    EndPrimitive();
}
"""

_FRAGMENT_SHADER = """
#version 410
uniform vec4 color;
out vec4 frag_color;
void main() {
    frag_color = color;
}
"""


class Shader:
    """ライン描画用シェーダの生成窓口。"""

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """`projection` / `line_thickness` / `color` を持つ moderngl.Program を返す。"""
        return ctx.program(
            vertex_shader=_VERTEX_SHADER,
            geometry_shader=_GEOMETRY_SHADER,
            fragment_shader=_FRAGMENT_SHADER,
        )
