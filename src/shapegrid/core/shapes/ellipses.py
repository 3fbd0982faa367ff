"""
どこで: `src/shapegrid/core/shapes/ellipses.py`。円弧を含む図形群。
何を: 円・円抜き正方形・1/4 扇形・半円と、その穴付き（リング状）版を登録する。
なぜ: 「不透明図形 + 背景色の円で穴を偽装する」表現をやめ、穴付き Outline に統一するため。
"""

from __future__ import annotations

import math

import numpy as np

from shapegrid.core.outline import Outline, arc_points, unit_square
from shapegrid.core.shape_registry import ShapeFunc, shape, shape_registry

OUTER_RADIUS = 0.5
HOLE_RADIUS = 0.35

_QUARTER = 0.5 * math.pi
_HALF = math.pi

# 名前 → (開始角, 掃引角)。角度は π/2 刻みで、すべて反時計回り。
WEDGE_ARCS: dict[str, tuple[float, float]] = {
    "BL": (_HALF, _QUARTER),
    "BR": (3.0 * _QUARTER, _QUARTER),
    "TL": (_QUARTER, _QUARTER),
    "TR": (0.0, _QUARTER),
}
SEMI_ARCS: dict[str, tuple[float, float]] = {
    "UP": (_HALF, _HALF),
    "DOWN": (0.0, _HALF),
    "LEFT": (_QUARTER, _HALF),
    "RIGHT": (-_QUARTER, _HALF),
}

_ORIGIN = np.zeros((1, 2), dtype=np.float32)


def _wedge_ring(radius: float, start: float, span: float) -> np.ndarray:
    # 中心 → 円弧 → 中心。
    return np.concatenate([_ORIGIN, arc_points(radius, start, span)], axis=0)


def _semi_ring(radius: float, start: float, span: float) -> np.ndarray:
    # 直径の両端は円弧の端点そのものなので、弦の中点（中心）を挟んで閉じる。
    return np.concatenate([arc_points(radius, start, span), _ORIGIN], axis=0)


def _sector_factory(start: float, span: float, *, semi: bool, negative: bool) -> ShapeFunc:
    ring = _semi_ring if semi else _wedge_ring

    def generate() -> Outline:
        outer = ring(OUTER_RADIUS, start, span)
        hole = ring(HOLE_RADIUS, start, span) if negative else None
        return Outline(outer=outer, hole=hole)

    return generate


@shape("ellipse")
def _ellipse() -> Outline:
    # 終点は始点と重なるため落とす（閉じは暗黙）。
    return Outline(outer=arc_points(OUTER_RADIUS, 0.0, 2.0 * math.pi)[:-1])


@shape("ellipse_neg")
def _ellipse_neg() -> Outline:
    return Outline(
        outer=unit_square().outer,
        hole=arc_points(OUTER_RADIUS, 0.0, 2.0 * math.pi)[:-1],
    )


for _key, (_start, _span) in WEDGE_ARCS.items():
    shape_registry._register(
        f"ellipse_{_key}", _sector_factory(_start, _span, semi=False, negative=False)
    )
for _key, (_start, _span) in SEMI_ARCS.items():
    shape_registry._register(
        f"ellipse_semi_{_key}", _sector_factory(_start, _span, semi=True, negative=False)
    )
for _key, (_start, _span) in WEDGE_ARCS.items():
    shape_registry._register(
        f"ellipse_neg_{_key}", _sector_factory(_start, _span, semi=False, negative=True)
    )
for _key, (_start, _span) in SEMI_ARCS.items():
    shape_registry._register(
        f"ellipse_semi_neg_{_key}",
        _sector_factory(_start, _span, semi=True, negative=True),
    )
