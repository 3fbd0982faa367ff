# どこで: `src/shapegrid/interactive/runtime/shortcuts.py`。
# 何を: 描画ウィンドウのキーボードショートカット（文字 → ShapeGrid 操作）を定義する。
# なぜ: pyglet のイベント配線から切り離し、ウィンドウなしで挙動を検証できるようにするため。

from __future__ import annotations

import logging
from typing import Callable

from shapegrid.core.shape_grid import ShapeGrid

_logger = logging.getLogger(__name__)

ShortcutAction = Callable[[ShapeGrid], object]

SHORTCUTS: dict[str, ShortcutAction] = {
    "1": lambda grid: grid.nudge("animation_speed", -0.1),
    "2": lambda grid: grid.nudge("animation_speed", +0.1),
    "3": lambda grid: grid.nudge("movement_amplitude", -0.05),
    "4": lambda grid: grid.nudge("movement_amplitude", +0.05),
    "5": lambda grid: grid.nudge("rotation_amplitude", -0.1),
    "6": lambda grid: grid.nudge("rotation_amplitude", +0.1),
    "7": lambda grid: grid.nudge("scale_amplitude", -0.05),
    "8": lambda grid: grid.nudge("scale_amplitude", +0.05),
    "s": lambda grid: grid.toggle("enable_shape_cycling"),
    "a": lambda grid: grid.toggle("enable_size_animation"),
    "g": lambda grid: grid.toggle("show_grid"),
    "r": lambda grid: grid.randomize(),
    "c": lambda grid: grid.next_animation_type(),
}
"""文字 → 操作。大文字は小文字として扱う。"""


def handle_shortcut(grid: ShapeGrid, text: str) -> bool:
    """文字に割り当てられた操作を実行し、処理したら True を返す。"""
    action = SHORTCUTS.get(text.lower()) if len(text) == 1 else None
    if action is None:
        return False
    result = action(grid)
    _logger.debug("shortcut %r -> %r", text, result)
    return True


__all__ = ["SHORTCUTS", "handle_shortcut"]
