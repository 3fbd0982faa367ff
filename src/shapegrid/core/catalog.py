# どこで: `src/shapegrid/core/catalog.py`。
# 何を: 図形カタログの公開窓口（生成・カテゴリ・有効カテゴリによる正準プール）を提供する。
# なぜ: 合成グリッド/表示グリッド/アニメーションが同じ正準順プールを参照するため。

from __future__ import annotations

from collections.abc import Mapping

import shapegrid.core.shapes  # noqa: F401  組み込み図形の登録
from shapegrid.core.outline import Outline, unit_square
from shapegrid.core.shape_registry import ShapeCategory, category_of, shape_registry


def shape_names() -> tuple[str, ...]:
    """カタログの全図形名を正準順で返す。"""
    return shape_registry.names()


def generate(name: str) -> Outline | None:
    """図形名の Outline を返す。未登録名は None。"""
    return shape_registry.generate(name)


def outline_or_default(name: str) -> Outline:
    """図形名の Outline を返す。未登録名は既定の単位正方形にフォールバックする。"""
    outline = shape_registry.generate(name)
    if outline is None:
        return unit_square()
    return outline


def _is_enabled(enabled: Mapping[ShapeCategory | str, bool], category: ShapeCategory) -> bool:
    if category in enabled:
        return bool(enabled[category])
    return bool(enabled.get(category.value, False))


def available_shape_names(enabled: Mapping[ShapeCategory | str, bool]) -> tuple[str, ...]:
    """有効カテゴリに属する図形名を正準順で返す。

    Parameters
    ----------
    enabled : Mapping[ShapeCategory | str, bool]
        カテゴリ（enum または値文字列）→ 有効フラグ。欠けたカテゴリは無効扱い。
    """
    return tuple(
        name for name in shape_registry.names() if _is_enabled(enabled, category_of(name))
    )


__all__ = [
    "ShapeCategory",
    "available_shape_names",
    "category_of",
    "generate",
    "outline_or_default",
    "shape_names",
]
