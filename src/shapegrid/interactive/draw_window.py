# どこで: `src/shapegrid/interactive/draw_window.py`。
# 何を: 描画ウィンドウと Parameter GUI ウィンドウが共有する pyglet ウィンドウ生成を提供する。
# なぜ: MSAA 設定と初期位置の扱いを 1 箇所にまとめ、core/export をヘッドレスに保つため。

from __future__ import annotations

import pyglet
from pyglet.window import Window

from shapegrid.interactive.render_settings import RenderSettings

DRAW_WINDOW_CAPTION = "ShapeGrid"


def open_window(
    width: int,
    height: int,
    *,
    caption: str,
    position: tuple[int, int] | None = None,
    vsync: bool | None = None,
) -> Window:
    """4x MSAA のサイズ固定ウィンドウを開き、position があればそこへ移動する。"""
    config = pyglet.gl.Config(double_buffer=True, sample_buffers=1, samples=4)  # type: ignore[abstract]
    options = {} if vsync is None else {"vsync": bool(vsync)}
    window = pyglet.window.Window(  # type: ignore[abstract]
        width=int(width),
        height=int(height),
        caption=caption,
        resizable=False,
        config=config,
        **options,
    )
    if position is not None:
        window.set_location(int(position[0]), int(position[1]))
    return window


def create_draw_window(settings: RenderSettings) -> Window:
    """キャンバス寸法 * render_scale の描画ウィンドウを開く。"""
    canvas_w, canvas_h = settings.canvas_size
    return open_window(
        round(canvas_w * settings.render_scale),
        round(canvas_h * settings.render_scale),
        caption=DRAW_WINDOW_CAPTION,
        position=settings.window_pos,
    )
