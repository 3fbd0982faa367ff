"""図形カタログ（`shapegrid.core.catalog`）の正準順・カテゴリ・プールのテスト。"""

from __future__ import annotations


import numpy as np
import pytest

from shapegrid.core.catalog import (
    ShapeCategory,
    available_shape_names,
    category_of,
    generate,
    outline_or_default,
    shape_names,
)
from shapegrid.core.outline import ARC_SEGMENTS_PER_QUARTER
from shapegrid.core.shape_registry import ShapeRegistry, shape_registry


def _counts() -> dict[ShapeCategory, int]:
    out = {c: 0 for c in ShapeCategory}
    for name in shape_names():
        out[category_of(name)] += 1
    return out


def test_catalog_has_sixty_unique_shapes() -> None:
    names = shape_names()
    assert len(names) == 60
    assert len(set(names)) == 60


def test_category_sizes() -> None:
    assert _counts() == {
        ShapeCategory.BASIC: 2,
        ShapeCategory.TRIANGLE: 30,
        ShapeCategory.RECTANGLE: 11,
        ShapeCategory.ELLIPSE: 17,
    }


@pytest.mark.parametrize(
    ("name", "category"),
    [
        ("triangle_UP", ShapeCategory.TRIANGLE),
        ("Rect", ShapeCategory.RECTANGLE),
        ("longRect_V", ShapeCategory.RECTANGLE),
        ("rect_angled_TOP", ShapeCategory.RECTANGLE),
        ("ellipse_neg", ShapeCategory.ELLIPSE),
        ("ellipse_semi_UP", ShapeCategory.ELLIPSE),
        ("ellipse", ShapeCategory.BASIC),
        ("diamond", ShapeCategory.BASIC),
        ("unknown", ShapeCategory.BASIC),
    ],
)
def test_category_of_uses_name_prefix(name: str, category: ShapeCategory) -> None:
    assert category_of(name) is category


def test_canonical_order_starts_with_triangles_then_rectangles() -> None:
    names = shape_names()
    assert names[0] == "triangle_UP"
    assert names[29] == "triangle_edge_RIGHT"
    assert names[30] == "Rect"
    assert names.index("diamond") < names.index("ellipse")


def test_pool_with_everything_enabled_starts_with_triangle_up() -> None:
    pool = available_shape_names({c: True for c in ShapeCategory})
    assert pool == shape_names()
    assert pool[0] == "triangle_UP"


def test_pool_keeps_canonical_order_within_filter() -> None:
    pool = available_shape_names({ShapeCategory.BASIC: True, ShapeCategory.RECTANGLE: True})
    assert pool[0] == "Rect"
    assert pool[-2:] == ("diamond", "ellipse")
    assert len(pool) == 13


def test_pool_accepts_string_keys_and_treats_missing_as_disabled() -> None:
    assert available_shape_names({"Basic": True}) == ("diamond", "ellipse")
    assert available_shape_names({}) == ()


def test_every_shape_generates_a_valid_outline() -> None:
    for name in shape_names():
        outline = generate(name)
        assert outline is not None, name
        for ring in outline.rings():
            assert ring.shape[0] >= 3
            assert np.all(np.abs(ring) <= 0.5 + 1e-6), name


def test_ring_shapes_have_holes() -> None:
    for name in shape_names():
        outline = generate(name)
        assert outline is not None
        expects_hole = name.startswith(("ellipse_neg", "ellipse_semi_neg"))
        assert outline.has_hole is expects_hole, name


def test_generate_unknown_returns_none_and_default_falls_back_to_square() -> None:
    assert generate("no_such_shape") is None
    square = outline_or_default("no_such_shape")
    np.testing.assert_allclose(
        square.outer, [[-0.5, -0.5], [0.5, -0.5], [0.5, 0.5], [-0.5, 0.5]]
    )


def test_triangle_up_points() -> None:
    outline = generate("triangle_UP")
    assert outline is not None
    np.testing.assert_allclose(outline.outer, [[-0.5, -0.5], [0.5, -0.5], [0.0, 0.5]])


def test_ellipse_wedge_runs_origin_then_arc() -> None:
    outline = generate("ellipse_TR")
    assert outline is not None
    assert outline.outer.shape[0] == ARC_SEGMENTS_PER_QUARTER + 2
    np.testing.assert_allclose(outline.outer[0], [0.0, 0.0])
    np.testing.assert_allclose(outline.outer[1], [0.5, 0.0], atol=1e-6)
    np.testing.assert_allclose(outline.outer[-1], [0.0, 0.5], atol=1e-6)


def test_semi_ellipse_neg_hole_is_smaller_ring() -> None:
    outline = generate("ellipse_semi_neg_UP")
    assert outline is not None and outline.hole is not None
    arc = outline.hole[:-1]
    np.testing.assert_allclose(np.hypot(arc[:, 0], arc[:, 1]), 0.35, atol=1e-6)
    # UP は π から反時計回りに半周する（全点が y <= 0）。
    assert np.all(outline.outer[:, 1] <= 1e-6)


def test_ellipse_neg_is_square_with_circular_hole() -> None:
    outline = generate("ellipse_neg")
    assert outline is not None and outline.hole is not None
    assert outline.outer.shape == (4, 2)
    radii = np.hypot(outline.hole[:, 0], outline.hole[:, 1])
    np.testing.assert_allclose(radii, 0.5, atol=1e-6)
    assert outline.hole.shape[0] == 4 * ARC_SEGMENTS_PER_QUARTER


def test_registry_reregistration_keeps_position() -> None:
    registry = ShapeRegistry()
    registry._register("a", lambda: outline_or_default("Rect"))
    registry._register("b", lambda: outline_or_default("Rect"))
    registry._register("a", lambda: outline_or_default("diamond"))
    assert registry.names() == ("a", "b")
    with pytest.raises(ValueError):
        registry._register("b", lambda: outline_or_default("Rect"), overwrite=False)
    assert "a" in registry and len(registry) == 2


def test_global_registry_has_rect() -> None:
    assert "Rect" in shape_registry
