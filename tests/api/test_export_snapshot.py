"""ヘッドレス書き出し（`shapegrid.api.export_snapshot`）のテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from shapegrid.api import export_snapshot
from shapegrid.api._params import resolve_initial_params
from shapegrid.core.parameters import GridParams
from shapegrid.core.runtime_config import set_config_path

_NS = {"svg": "http://www.w3.org/2000/svg"}


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    yield
    set_config_path(None)


def _filled_paths(path: Path) -> list[ET.Element]:
    root = ET.parse(path).getroot()
    return [p for p in root.findall("svg:path", _NS) if p.get("fill") != "none"]


def test_export_snapshot_writes_one_path_per_cell(tmp_path: Path) -> None:
    out = export_snapshot(
        tmp_path / "snap.svg",
        params={"grid_width": 3, "grid_height": 2},
        seed=1,
        canvas_size=(200, 100),
    )
    assert out.is_file()
    root = ET.parse(out).getroot()
    assert root.get("width") == "200"
    assert len(_filled_paths(out)) == 6


def test_same_seed_gives_identical_svg(tmp_path: Path) -> None:
    a = export_snapshot(tmp_path / "a.svg", seed=7, canvas_size=(100, 100))
    b = export_snapshot(tmp_path / "b.svg", seed=7, canvas_size=(100, 100))
    assert a.read_text(encoding="utf-8") == b.read_text(encoding="utf-8")


def test_elapsed_advances_animation(tmp_path: Path) -> None:
    params = {"enable_size_animation": True, "animation_type": "rotation"}
    still = export_snapshot(tmp_path / "still.svg", params=params, seed=3, canvas_size=(100, 100))
    moved = export_snapshot(
        tmp_path / "moved.svg", params=params, seed=3, elapsed=2.0, canvas_size=(100, 100)
    )
    assert still.read_text(encoding="utf-8") != moved.read_text(encoding="utf-8")


def test_config_params_are_used_as_initial_values(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    cfg.write_text("params:\n  grid_width: 5\n  cell_size: 1.5\n", encoding="utf-8")

    params = resolve_initial_params({"grid_height": 2}, config_path=cfg)
    assert params.grid_width == 5
    assert params.grid_height == 2
    assert params.cell_size == 1.5


def test_explicit_grid_params_win_over_config(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    cfg.write_text("params:\n  grid_width: 5\n", encoding="utf-8")
    given = GridParams(grid_width=2)
    assert resolve_initial_params(given, config_path=cfg) is given


def test_bad_frame_delta_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        export_snapshot(tmp_path / "x.svg", frame_delta=0.0, canvas_size=(10, 10))
