# どこで: `src/shapegrid/interactive/parameter_gui/pyglet_backend.py`。
# 何を: Parameter GUI 用ウィンドウの生成と、imgui の pyglet 連携（renderer / IO 同期）を提供する。
# なぜ: ParameterGUI 本体を imgui バインディングの版差から切り離すため。

from __future__ import annotations

from typing import Any

DEFAULT_WINDOW_WIDTH = 420
DEFAULT_WINDOW_HEIGHT = 720
GUI_WINDOW_CAPTION = "ShapeGrid Parameters"


def _create_imgui_pyglet_renderer(imgui_pyglet_mod: Any, gui_window: Any) -> Any:
    """`create_renderer()`（新しい版）か `PygletRenderer`（古い版）で renderer を作る。"""
    make = getattr(imgui_pyglet_mod, "create_renderer", None) or getattr(
        imgui_pyglet_mod, "PygletRenderer", None
    )
    if make is None:
        raise RuntimeError("imgui.integrations.pyglet に renderer がない")
    return make(gui_window)


def _sync_imgui_io_for_window(imgui_mod: Any, gui_window: Any, *, dt: float) -> None:
    """ImGui IO の Δt・論理サイズ・framebuffer 倍率をウィンドウに合わせる。"""
    io = imgui_mod.get_io()
    # Δt=0 は imgui 側で assert されるので下限を設ける。
    io.delta_time = max(float(dt), 1e-4)

    width, height = float(gui_window.width), float(gui_window.height)
    fb_w, fb_h = gui_window.get_framebuffer_size()
    io.display_size = (width, height)
    io.display_fb_scale = (fb_w / max(width, 1.0), fb_h / max(height, 1.0))


def create_parameter_gui_window(
    *,
    width: int = DEFAULT_WINDOW_WIDTH,
    height: int = DEFAULT_WINDOW_HEIGHT,
    position: tuple[int, int] | None = None,
) -> Any:
    """Parameter GUI 用のウィンドウを開く（vsync 無効）。"""
    from shapegrid.interactive.draw_window import open_window

    return open_window(
        width, height, caption=GUI_WINDOW_CAPTION, position=position, vsync=False
    )
