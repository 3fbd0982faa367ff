# どこで: `src/shapegrid/interactive/parameter_gui/gui.py`。
# 何を: GridParams を pyimgui で編集するコントロールパネル（初期化/1フレーム描画/破棄）を提供する。
# なぜ: 依存の重いライフサイクル管理を 1 箇所に閉じ込め、他モジュールを純粋に保つため。

from __future__ import annotations

import logging
import time
from typing import Any

from shapegrid.core.parameter_view import rows_from_params, value_from_widget
from shapegrid.core.shape_grid import ShapeGrid

from .pyglet_backend import _create_imgui_pyglet_renderer, _sync_imgui_io_for_window
from .widgets import render_value_widget

_logger = logging.getLogger(__name__)

_LABEL_COLUMN_WIDTH = 150.0


class ParameterGUI:
    """pyimgui で GridParams を編集する最小 GUI。

    編集結果は `ShapeGrid.update()` に渡し、再構築などの副作用をエンジン側に任せる。
    """

    def __init__(
        self,
        gui_window: Any,
        *,
        grid: ShapeGrid,
        title: str = "Parameters",
    ) -> None:
        """GUI の初期化（ImGui コンテキスト / renderer 作成）。"""

        import imgui  # type: ignore[import-untyped]

        # imgui の pyglet backend は環境によって import 経路が揺れるため、明示的にここで解決する。
        try:
            from imgui.integrations import (
                pyglet as imgui_pyglet,  # type: ignore[import-untyped]
            )
        except ImportError as exc:
            raise RuntimeError(f"imgui.integrations.pyglet を import できない: {exc}") from exc

        self._window = gui_window
        self._grid = grid
        self._title = str(title)

        # ImGui は「グローバルな current context」を前提にするため、自前コンテキストを作って切り替えながら使う。
        self._imgui = imgui
        self._context = imgui.create_context()
        imgui.style_colors_dark()
        imgui.set_current_context(self._context)

        self._renderer = _create_imgui_pyglet_renderer(imgui_pyglet, gui_window)

        self._prev_time = time.monotonic()
        self._closed = False

    def _render_rows(self) -> dict[str, Any]:
        imgui = self._imgui
        changes: dict[str, Any] = {}
        current_section: str | None = None
        expanded = True

        for row in rows_from_params(self._grid.params):
            if row.section != current_section:
                current_section = row.section
                expanded, _ = imgui.collapsing_header(
                    row.section, flags=imgui.TREE_NODE_DEFAULT_OPEN
                )
            if not expanded:
                continue

            imgui.push_id(row.name)
            try:
                imgui.text(row.label)
                imgui.same_line(_LABEL_COLUMN_WIDTH)
                imgui.push_item_width(-1)
                changed, value = render_value_widget(row)
                imgui.pop_item_width()
            finally:
                imgui.pop_id()
            if changed:
                changes[row.name] = value_from_widget(row, value)
        return changes

    def _render_actions(self) -> None:
        imgui = self._imgui
        imgui.separator()
        if imgui.button("Regenerate"):
            self._grid.rebuild()
        imgui.same_line()
        if imgui.button("Randomize"):
            self._grid.randomize()
        imgui.same_line()
        if imgui.button("Next Animation"):
            self._grid.next_animation_type()

        grid = self._grid
        imgui.text(
            f"cells={len(grid.cells)} pool={len(grid.pool)} t={grid.clock.time:.2f}"
        )

    def draw_frame(self) -> bool:
        """1 フレーム分の GUI を描画し、変更があれば ShapeGrid に反映する。

        `flip()` は呼ばない。呼び出し側が `window.flip()` を担当する。
        """

        if self._closed:
            return False

        now = time.monotonic()
        dt = now - self._prev_time
        self._prev_time = now

        imgui = self._imgui
        imgui.set_current_context(self._context)

        # 注: imgui.integrations.pyglet の process_inputs() は内部で pyglet.clock.tick() を呼ぶ。
        # `pyglet.app.run()` 駆動時にこれを呼ぶと clock が二重に進みやすいので、ここでは呼ばない。
        imgui.new_frame()
        _sync_imgui_io_for_window(imgui, self._window, dt=dt)

        imgui.set_next_window_position(0, 0)
        imgui.set_next_window_size(self._window.width, self._window.height)
        imgui.begin(
            self._title,
            flags=imgui.WINDOW_NO_RESIZE
            | imgui.WINDOW_NO_COLLAPSE
            | imgui.WINDOW_NO_TITLE_BAR,
        )
        try:
            changes = self._render_rows()
            self._render_actions()
        finally:
            imgui.end()

        imgui.render()

        import pyglet

        pyglet.gl.glClearColor(0.12, 0.12, 0.12, 1.0)
        self._window.clear()
        self._renderer.render(imgui.get_draw_data())

        if not changes:
            return False
        # ImGui のフレーム描画が終わってから反映する（再構築をフレーム途中で起こさない）。
        try:
            self._grid.update(**changes)
        except ValueError:
            _logger.exception("Invalid parameter change from GUI: %s", sorted(changes))
            return False
        return True

    def close(self) -> None:
        """GUI を終了し、コンテキストとウィンドウを破棄する。"""

        if self._closed:
            return
        self._closed = True

        shutdown = getattr(self._renderer, "shutdown", None)
        if callable(shutdown):
            shutdown()
        self._imgui.destroy_context(self._context)
        self._window.close()
