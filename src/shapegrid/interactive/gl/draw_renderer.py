# どこで: `src/shapegrid/interactive/gl/draw_renderer.py`。
# 何を: ライブ描画用の ModernGL レンダラーをカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・メッシュ転送をウィンドウ処理から分離し、責務を明確にするため。

from __future__ import annotations

import moderngl
from pyglet.window import Window

from shapegrid.core.outline import PolylineBatch
from shapegrid.interactive.gl import utils as render_utils
from shapegrid.interactive.gl.line_mesh import LineMesh
from shapegrid.interactive.gl.shader import Shader
from shapegrid.interactive.render_settings import RenderSettings


class DrawRenderer:
    """RealizedLayer 列をライン描画するシンプルなレンダラー。"""

    def __init__(self, window: Window, settings: RenderSettings) -> None:
        window.switch_to()
        self.ctx = moderngl.create_context(require=410)
        self.program = Shader.create_shader(self.ctx)
        # レイヤーごとに毎フレーム upload するため、メッシュは 1 つを使い回す。
        self._mesh = LineMesh(self.ctx, self.program)
        self._canvas_w, self._canvas_h = settings.canvas_size
        self._view: tuple[float, float] | None = None

    def set_view(self, view_width: float, view_height: float) -> None:
        """表示範囲（ワールド単位）を更新する。変化が無ければ何もしない。"""
        view = (float(view_width), float(view_height))
        if view == self._view:
            return
        projection = render_utils.build_projection(*view)
        self.program["projection"].write(projection.tobytes())
        self._view = view

    def viewport(self, width: int, height: int) -> None:
        """ビューポートをウィンドウサイズに合わせて更新する。"""
        self.ctx.viewport = (0, 0, int(width), int(height))

    def clear(self, color: tuple[float, float, float]) -> None:
        """背景色でクリアする。"""
        self.ctx.clear(*color, 1.0)

    def render_layer(
        self,
        batch: PolylineBatch,
        *,
        color: tuple[float, float, float],
        thickness: float,
    ) -> None:
        """PolylineBatch をライン描画する。"""
        if self._mesh.upload(batch) == 0:
            return
        self.program["line_thickness"].value = float(thickness)
        self.program["color"].value = (*color, 1.0)
        self._mesh.render()

    def release(self) -> None:
        """GPU リソースを解放する。"""
        self._mesh.release()
        self.program.release()
        self.ctx.release()
