# src/shapegrid/core/shape_registry.py
# 図形名 → Outline 生成関数のレジストリと、名前からのカテゴリ導出。
# 登録順をそのまま「正準順」として保持する。

from __future__ import annotations

from collections.abc import ItemsView
from enum import Enum
from typing import Callable

from shapegrid.core.outline import Outline

ShapeFunc = Callable[[], Outline]

DEFAULT_SHAPE = "Rect"
"""空プール/範囲外参照時に割り当てる既定の図形名。"""

_RECTANGLE_EXACT = frozenset({"Rect", "longRect_V", "longRect_H"})


class ShapeCategory(str, Enum):
    """図形カテゴリ。有効/無効フィルタの単位。"""

    BASIC = "Basic"
    TRIANGLE = "Triangle"
    RECTANGLE = "Rectangle"
    ELLIPSE = "Ellipse"


def category_of(name: str) -> ShapeCategory:
    """図形名の接頭辞規則からカテゴリを導出する。

    ``triangle_`` → Triangle、``rect_`` または Rect/longRect_V/longRect_H → Rectangle、
    ``ellipse_`` → Ellipse、それ以外 → Basic。
    """
    if name.startswith("triangle_"):
        return ShapeCategory.TRIANGLE
    if name.startswith("rect_") or name in _RECTANGLE_EXACT:
        return ShapeCategory.RECTANGLE
    if name.startswith("ellipse_"):
        return ShapeCategory.ELLIPSE
    return ShapeCategory.BASIC


class ShapeRegistry:
    """図形名と Outline 生成関数を対応付けるレジストリ。

    Notes
    -----
    dict の挿入順を正準順として扱うため、同名の再登録は元の位置を保ったまま関数だけ差し替える。
    """

    def __init__(self) -> None:
        self._items: dict[str, ShapeFunc] = {}

    def _register(self, name: str, func: ShapeFunc, *, overwrite: bool = True) -> None:
        if not overwrite and name in self._items:
            raise ValueError(f"shape '{name}' は既に登録されている")
        self._items[name] = func

    def get(self, name: str) -> ShapeFunc:
        """図形名に対応する生成関数を返す。未登録なら KeyError。"""
        return self._items[name]

    def generate(self, name: str) -> Outline | None:
        """図形名の Outline を生成する。未登録なら None を返す。"""
        func = self._items.get(name)
        if func is None:
            return None
        return func()

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __getitem__(self, name: str) -> ShapeFunc:
        return self.get(name)

    def __len__(self) -> int:
        return len(self._items)

    def names(self) -> tuple[str, ...]:
        """登録済みの図形名を正準順で返す。"""
        return tuple(self._items)

    def items(self) -> ItemsView[str, ShapeFunc]:
        return self._items.items()


shape_registry = ShapeRegistry()
"""グローバルな図形レジストリインスタンス。"""


def shape(name: str, *, overwrite: bool = True) -> Callable[[ShapeFunc], ShapeFunc]:
    """グローバル図形レジストリ用デコレータ。

    Examples
    --------
    @shape("ellipse")
    def _ellipse() -> Outline:
        ...
    """

    def decorator(func: ShapeFunc) -> ShapeFunc:
        shape_registry._register(str(name), func, overwrite=overwrite)
        return func

    return decorator


__all__ = [
    "DEFAULT_SHAPE",
    "ShapeCategory",
    "ShapeFunc",
    "ShapeRegistry",
    "category_of",
    "shape",
    "shape_registry",
]
