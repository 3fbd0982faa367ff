"""保持モードシーン（`shapegrid.core.scene`）のテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from shapegrid.core.outline import PolylineBatch, unit_square
from shapegrid.core.scene import GRID_LAYER, SHAPE_LAYER, RetainedScene, ScenePrimitive


def _segment() -> PolylineBatch:
    return PolylineBatch(
        coords=np.array([[0.0, 0.0], [1.0, 0.0]], dtype=np.float32),
        offsets=np.array([0, 2], dtype=np.int32),
    )


def test_add_remove_dispose_bookkeeping() -> None:
    scene = RetainedScene()
    p = ScenePrimitive(geometry=unit_square(), color=(0, 255, 255))
    scene.add(p)
    assert scene.live_count == 1

    scene.dispose(p)
    scene.remove(p)
    assert scene.live_count == 0
    assert scene.disposed_total == 1


def test_misuse_raises() -> None:
    scene = RetainedScene()
    p = ScenePrimitive(geometry=unit_square(), color=(0, 0, 0))
    with pytest.raises(RuntimeError):
        scene.remove(p)
    scene.dispose(p)
    with pytest.raises(RuntimeError):
        scene.dispose(p)
    with pytest.raises(RuntimeError):
        scene.add(p)
    with pytest.raises(RuntimeError):
        scene.replace_geometry(p, unit_square())


def test_world_polylines_apply_transform() -> None:
    p = ScenePrimitive(geometry=unit_square(), color=(0, 0, 0), position=(2.0, 3.0), scale=2.0)
    world = p.world_polylines()
    np.testing.assert_allclose(world.coords[0], [1.0, 2.0])
    assert p.is_closed


def test_set_transform_and_replace_geometry() -> None:
    scene = RetainedScene()
    p = ScenePrimitive(geometry=unit_square(), color=(0, 0, 0))
    scene.add(p)
    scene.set_transform(p, position=(1, 2), rotation=0.5, scale=3)
    assert (p.position, p.rotation, p.scale) == ((1.0, 2.0), 0.5, 3.0)

    line = _segment()
    scene.replace_geometry(p, line, color=(255, 255, 255))
    assert p.geometry is line
    assert p.color == (255, 255, 255)
    assert not p.is_closed


def test_realize_groups_by_layer_and_color_with_grid_last() -> None:
    scene = RetainedScene()
    scene.add(ScenePrimitive(geometry=_segment(), color=(255, 0, 0), layer=GRID_LAYER))
    scene.add(ScenePrimitive(geometry=unit_square(), color=(0, 255, 255)))
    scene.add(ScenePrimitive(geometry=unit_square(), color=(0, 255, 255), position=(1.0, 0.0)))

    layers = scene.realize()
    assert [(l.layer, l.color) for l in layers] == [
        (SHAPE_LAYER, (0, 255, 255)),
        (GRID_LAYER, (255, 0, 0)),
    ]
    assert layers[0].batch.polyline_count == 2
    assert layers[0].batch.coords.shape == (10, 2)


def test_clear_disposes_everything() -> None:
    scene = RetainedScene()
    for _ in range(3):
        scene.add(ScenePrimitive(geometry=unit_square(), color=(0, 0, 0)))
    scene.clear()
    assert scene.live_count == 0
    assert scene.disposed_total == 3
    assert scene.primitives() == []
