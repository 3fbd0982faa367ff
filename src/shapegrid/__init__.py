# どこで: `src/shapegrid/__init__.py`。
# 何を: ルート `shapegrid` パッケージを定義する。
# なぜ: import 起点を `shapegrid` に統一するため。

from __future__ import annotations

from shapegrid.api import export_snapshot, run
from shapegrid.core.parameters import AnimationType, GridParams
from shapegrid.core.scene import RetainedScene
from shapegrid.core.shape_grid import ShapeGrid
from shapegrid.core.shape_registry import ShapeCategory

__all__ = [
    "AnimationType",
    "GridParams",
    "RetainedScene",
    "ShapeCategory",
    "ShapeGrid",
    "export_snapshot",
    "run",
]
