"""SVG 書き出し（`shapegrid.export.svg`）のテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import numpy as np
import pytest

from shapegrid.core.catalog import generate
from shapegrid.core.outline import unit_square
from shapegrid.core.parameters import GridParams
from shapegrid.core.scene import RetainedScene, ScenePrimitive
from shapegrid.core.shape_grid import ShapeGrid
from shapegrid.export.svg import _fmt, export_svg

_NS = {"svg": "http://www.w3.org/2000/svg"}


def test_fmt_is_deterministic_and_drops_negative_zero() -> None:
    assert _fmt(1.23456) == "1.235"
    assert _fmt(-0.0001) == "0.000"
    assert _fmt(-1.5) == "-1.500"


def test_export_svg_writes_background_and_square(tmp_path: Path) -> None:
    scene = RetainedScene()
    scene.add(ScenePrimitive(geometry=unit_square(), color=(0, 255, 255), position=(0.0, 0.0)))
    params = GridParams(grid_width=2, grid_height=2, background_color=(1, 2, 3))

    out = export_svg(scene, tmp_path / "a.svg", params=params, canvas_size=(100, 100))
    root = ET.parse(out).getroot()

    rect = root.find("svg:rect", _NS)
    assert rect is not None
    assert rect.get("fill") == "#010203"

    paths = root.findall("svg:path", _NS)
    assert len(paths) == 1
    # 2x2 グリッド / 100px キャンバス → 1 単位 = 45px、y は下向きに反転する。
    assert paths[0].get("d") == (
        "M 27.500 72.500 L 72.500 72.500 L 72.500 27.500 L 27.500 27.500 Z"
    )
    assert paths[0].get("fill") == "#00ffff"
    assert paths[0].get("fill-rule") == "evenodd"


def test_shapes_with_holes_become_one_path_with_two_subpaths(tmp_path: Path) -> None:
    scene = RetainedScene()
    grid = ShapeGrid(
        GridParams(grid_width=1, grid_height=1, composition_width=1, composition_height=1),
        scene,
        rng=np.random.default_rng(0),
    )
    ring = generate("ellipse_neg")
    assert ring is not None
    scene.replace_geometry(grid.cells[0].primitive, ring)

    out = export_svg(scene, tmp_path / "ring.svg", params=grid.params, canvas_size=(64, 64))
    paths = ET.parse(out).getroot().findall("svg:path", _NS)
    assert len(paths) == 1
    assert paths[0].get("d").count("M ") == 2
    assert paths[0].get("d").count("Z") == 2


def test_grid_overlay_is_stroked(tmp_path: Path) -> None:
    scene = RetainedScene()
    ShapeGrid(
        GridParams(grid_width=2, grid_height=2, show_grid=True),
        scene,
        rng=np.random.default_rng(0),
    )
    out = export_svg(
        scene, tmp_path / "grid.svg", params=GridParams(grid_width=2, grid_height=2), canvas_size=(80, 80)
    )
    paths = ET.parse(out).getroot().findall("svg:path", _NS)
    stroked = [p for p in paths if p.get("fill") == "none"]
    assert len(stroked) == 6
    assert {p.get("stroke") for p in stroked} == {"#ff0000"}


def test_export_svg_creates_parent_dirs(tmp_path: Path) -> None:
    out = export_svg(
        RetainedScene(), tmp_path / "nested" / "x.svg", params=GridParams(), canvas_size=(10, 10)
    )
    assert out.is_file()


@pytest.mark.parametrize("canvas_size", [(0, 10), (10, -5)])
def test_export_svg_rejects_bad_canvas(tmp_path: Path, canvas_size) -> None:
    with pytest.raises(ValueError):
        export_svg(RetainedScene(), tmp_path / "x.svg", params=GridParams(), canvas_size=canvas_size)
