# どこで: `src/shapegrid/interactive/runtime/window_loop.py`。
# 何を: 描画ウィンドウと Parameter GUI を 1 本の `pyglet.app.run()` で回す `run_windows()` を提供する。
# なぜ: ShapeGrid の tick と各ウィンドウの描画を同一スレッドで順に行い、状態の競合を避けるため。

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, NamedTuple

import pyglet


class WindowTask(NamedTuple):
    """ウィンドウと、その back buffer へ描く関数（flip は pyglet 側）。"""

    window: Any
    draw_frame: Callable[[], None]


def run_windows(
    tasks: Sequence[WindowTask],
    *,
    fps: float,
    on_tick: Callable[[], None] | None = None,
) -> None:
    """どれかのウィンドウが閉じられるまでフレームを回す。

    1 フレームは `on_tick()` → 開いている各ウィンドウの `draw()` の順。
    `fps <= 0` なら間隔を空けずに毎ループ実行する。
    """
    tasks = tuple(tasks)

    def _stop(*_: object) -> None:
        pyglet.app.exit()

    for task in tasks:
        task.window.push_handlers(on_close=_stop, on_draw=task.draw_frame)

    def _frame(dt: float) -> None:
        if on_tick is not None:
            on_tick()
        for task in tasks:
            if task.window in pyglet.app.windows:
                task.window.draw(dt)

    if fps > 0:
        pyglet.clock.schedule_interval(_frame, 1.0 / float(fps))
    else:
        pyglet.clock.schedule(_frame)
    try:
        pyglet.app.run(interval=None)
    finally:
        pyglet.clock.unschedule(_frame)


__all__ = ["WindowTask", "run_windows"]
