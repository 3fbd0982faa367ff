# どこで: `src/shapegrid/interactive/runtime/draw_window_system.py`。
# 何を: ShapeGrid の保持シーンを描画ウィンドウへ描くサブシステムを提供する。
# なぜ: `src/shapegrid/api/runner.py` の `run()` を「配線」に寄せ、描画責務を独立させるため。

from __future__ import annotations

import logging
from pathlib import Path

from shapegrid.core.display_grid import grid_extent, view_scale
from shapegrid.core.output_paths import output_path
from shapegrid.core.parameters import rgb255_to_rgb01
from shapegrid.core.scene import RetainedScene
from shapegrid.core.shape_grid import ShapeGrid
from shapegrid.export.svg import export_svg
from shapegrid.interactive.draw_window import create_draw_window
from shapegrid.interactive.gl.draw_renderer import DrawRenderer
from shapegrid.interactive.render_settings import RenderSettings
from shapegrid.interactive.runtime.frame_clock import DeltaClock
from shapegrid.interactive.runtime.shortcuts import handle_shortcut

_logger = logging.getLogger(__name__)

_EXPORT_KEY = "e"


class DrawWindowSystem:
    """描画（メインウィンドウ）のサブシステム。"""

    def __init__(
        self,
        grid: ShapeGrid,
        scene: RetainedScene,
        *,
        settings: RenderSettings,
    ) -> None:
        """描画用の window/renderer を初期化する。"""

        self._grid = grid
        self._scene = scene
        self._settings = settings

        # 描画用の pyglet window を作成し、その window の OpenGL コンテキストに紐づく renderer を作る。
        self.window = create_draw_window(settings)
        self._renderer = DrawRenderer(self.window, settings)
        self.window.push_handlers(on_text=self._on_text)

        self._clock = DeltaClock()

    def _on_text(self, text: str) -> None:
        if text.lower() == _EXPORT_KEY:
            try:
                path = self.save_svg()
            except OSError:
                _logger.exception("Failed to save SVG")
                return
            print(f"Saved SVG: {path}")
            return
        handle_shortcut(self._grid, text)

    def save_svg(self, path: str | Path | None = None) -> Path:
        """現在のシーンを SVG として保存し、保存先パスを返す。"""
        target = Path(path) if path is not None else output_path(kind="svg", ext="svg")
        return export_svg(
            self._scene,
            target,
            params=self._grid.params,
            canvas_size=self._settings.canvas_size,
        )

    def tick(self) -> None:
        """前フレームからの経過秒でアニメーションを進める。"""
        self._grid.tick(self._clock.delta())

    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self.window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return int(w), int(h)
        return int(self.window.width), int(self.window.height)

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        # 注: 呼び出し側（pyglet.window.Window.draw）が事前に self.window.switch_to() 済みである前提。
        self._renderer.ctx.screen.use()

        fb_w, fb_h = self._framebuffer_size()
        self._renderer.viewport(fb_w, fb_h)

        params = self._grid.params
        self._renderer.clear(rgb255_to_rgb01(params.background_color))

        # グリッドの物理サイズをキャンバスに収める表示範囲を毎フレーム求める（cell_size 変更に追従）。
        canvas_w, canvas_h = self._settings.canvas_size
        scale = view_scale(
            grid_extent(params.grid_width, params.grid_height, params.cell_size),
            (canvas_w, canvas_h),
        )
        self._renderer.set_view(canvas_w / scale, canvas_h / scale)

        for layer in self._scene.realize():
            self._renderer.render_layer(
                layer.batch,
                color=rgb255_to_rgb01(layer.color),
                thickness=self._settings.line_thickness,
            )

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        # renderer が保持している GPU リソースを破棄してから window を閉じる。
        self._renderer.release()
        self.window.close()
