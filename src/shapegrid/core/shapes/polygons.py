"""
どこで: `src/shapegrid/core/shapes/polygons.py`。直線分のみで構成される図形群。
何を: 三角形系・矩形系・ダイヤモンドをアンカー点名の列として 1 つの表に宣言し、レジストリへ登録する。
なぜ: 呼び出し箇所ごとに重複していた図形定義を単一の正準テーブルへ集約するため。
"""

from __future__ import annotations

from shapegrid.core.anchor_points import anchor_points
from shapegrid.core.outline import Outline
from shapegrid.core.shape_registry import ShapeFunc, shape_registry

# 各行は外周を辿るアンカー点名の列（終点→始点の閉じは暗黙）。
# 並び順がそのまま正準順になる。
POLYGON_SHAPES: dict[str, tuple[str, ...]] = {
    # Triangles
    "triangle_UP": ("pt1", "pt2", "pt3_50"),
    "triangle_DOWN": ("pt4", "pt3", "pt2_50"),
    "triangle_LEFT": ("pt2", "pt3", "pt4_50"),
    "triangle_RIGHT": ("pt1", "pt4", "pt2_50"),
    "triangle_TL": ("pt1", "pt2", "pt4"),
    "triangle_BL": ("pt1", "pt4", "pt3"),
    "triangle_TR": ("pt1", "pt2", "pt3"),
    "triangle_BR": ("pt2", "pt3", "pt4"),
    "triangle_split_UP": ("pt1", "pt4", "pt1_50", "pt3", "pt2"),
    "triangle_split_DOWN": ("pt1", "pt4", "pt3", "pt2", "pt3_50"),
    "triangle_split_LEFT": ("pt1", "pt2", "pt4_50", "pt3", "pt4"),
    "triangle_split_RIGHT": ("pt1", "pt2", "pt3", "pt4", "pt2_50"),
    "triangle_IN_V": ("pt1", "pt2", "pt4", "pt3"),
    "triangle_IN_H": ("pt1", "pt3", "pt2", "pt4"),
    "triangle_neg_IN_DOWN": ("pt4", "pt3", "pt2", "pt1_75", "center", "pt1_25", "pt1"),
    "triangle_neg_IN_UP": ("pt1", "pt2", "pt3", "pt3_25", "center", "pt3_75", "pt4"),
    "triangle_neg_IN_RIGHT": ("pt1", "pt2", "pt3", "pt4", "pt4_25", "center", "pt4_75"),
    "triangle_neg_IN_LEFT": ("pt1", "pt2", "pt2_25", "center", "pt2_75", "pt3", "pt4"),
    "triangle_neg_DOWN": ("pt4", "pt3", "pt2", "center", "pt1"),
    "triangle_neg_UP": ("pt1", "pt2", "pt3", "center", "pt4"),
    "triangle_neg_RIGHT": ("pt1", "pt2", "pt3", "pt4", "center"),
    "triangle_neg_LEFT": ("pt1", "pt2", "center", "pt3", "pt4"),
    "triangle_bottom_LEFT": (
        "pt4_75", "pt1_50", "pt3_50", "pt4_25", "pt4", "pt3", "pt2", "pt1",
    ),
    "triangle_bottom_DOWN": (
        "pt3_75", "pt4_50", "pt2_50", "pt3_25", "pt3", "pt2", "pt1", "pt4",
    ),
    "triangle_bottom_RIGHT": (
        "pt2_25", "pt1_50", "pt3_50", "pt2_75", "pt3", "pt4", "pt1", "pt2",
    ),
    "triangle_bottom_UP": (
        "pt1_25", "pt4_50", "pt2_50", "pt1_75", "pt2", "pt3", "pt4", "pt1",
    ),
    "triangle_edge_BOTTOM": ("pt4_50", "pt3_50", "pt2_50", "pt3", "pt4"),
    "triangle_edge_TOP": ("pt4_50", "pt1_50", "pt2_50", "pt2", "pt1"),
    "triangle_edge_LEFT": ("pt4_50", "pt1_50", "pt1", "pt4", "pt3_50"),
    "triangle_edge_RIGHT": ("pt1_50", "pt2_50", "pt3_50", "pt3", "pt2"),
    # Rectangles
    "Rect": ("pt1", "pt2", "pt3", "pt4"),
    "longRect_V": ("pt1_25", "pt1_75", "pt3_25", "pt3_75"),
    "longRect_H": ("pt4_75", "pt2_25", "pt2_75", "pt4_25"),
    "rect_TL": ("pt2", "pt3", "pt4", "pt4_50", "center", "pt1_50"),
    "rect_TR": ("pt1", "pt4", "pt3", "pt2_50", "center", "pt1_50"),
    "rect_BL": ("pt1", "pt2", "pt3", "pt3_50", "center", "pt4_50"),
    "rect_BR": ("pt2", "pt1", "pt4", "pt3_50", "center", "pt2_50"),
    "rect_angled_TOP": ("pt4_50", "pt4", "pt3", "pt2"),
    "rect_angled_BOTTOM": ("pt2_50", "pt2", "pt1", "pt4"),
    "rect_angled_LEFT": ("pt1", "pt3_50", "pt3", "pt2"),
    "rect_angled_RIGHT": ("pt1_50", "pt3", "pt4", "pt1"),
    # Basic
    "diamond": ("pt1_50", "pt2_50", "pt3_50", "pt4_50"),
}


def _polygon_factory(names: tuple[str, ...]) -> ShapeFunc:
    def generate() -> Outline:
        return Outline(outer=anchor_points(names))

    return generate


for _name, _points in POLYGON_SHAPES.items():
    shape_registry._register(_name, _polygon_factory(_points))
