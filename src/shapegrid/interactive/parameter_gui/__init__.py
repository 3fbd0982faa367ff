# どこで: `src/shapegrid/interactive/parameter_gui/__init__.py`。
# 何を: Parameter GUI の公開 API を集約する。
# なぜ: 実装を責務ごとに分割しつつ、利用側の import パスを安定させるため。

from __future__ import annotations

from .gui import ParameterGUI
from .pyglet_backend import create_parameter_gui_window

__all__ = [
    "ParameterGUI",
    "create_parameter_gui_window",
]
