"""interactive.gl.index_buffer の `build_line_indices` をテスト。"""

from __future__ import annotations

import numpy as np

from shapegrid.interactive.gl.index_buffer import RESTART_INDEX, build_line_indices


def test_build_line_indices_empty() -> None:
    offsets = np.array([0], dtype=np.int32)
    indices = build_line_indices(offsets)
    assert indices.dtype == np.uint32
    assert indices.size == 0


def test_build_line_indices_single_polyline() -> None:
    # 3 vertices => 3 indices
    offsets = np.array([0, 3], dtype=np.int32)
    indices = build_line_indices(offsets)
    assert indices.tolist() == [0, 1, 2]


def test_build_line_indices_multiple_polylines_with_restart() -> None:
    offsets = np.array([0, 3, 5], dtype=np.int32)
    indices = build_line_indices(offsets)
    assert indices.tolist() == [
        0,
        1,
        2,
        RESTART_INDEX,
        3,
        4,
    ]


def test_build_line_indices_skips_short_polylines() -> None:
    # [0, 1) は 1 頂点なのでスキップし、[1, 4) のみ出力される
    offsets = np.array([0, 1, 4], dtype=np.int32)
    indices = build_line_indices(offsets)
    assert indices.tolist() == [1, 2, 3]


def test_build_line_indices_is_cached_by_offsets_content() -> None:
    offsets1 = np.array([0, 3, 5], dtype=np.int32)
    offsets2 = np.array([0, 3, 5], dtype=np.int32)
    indices1 = build_line_indices(offsets1)
    indices2 = build_line_indices(offsets2)
    assert indices1 is indices2


def test_build_line_indices_for_grid_overlay_segments() -> None:
    # 2 点ずつの線分 3 本 => 6 indices + restart 2 個
    offsets = np.array([0, 2, 4, 6], dtype=np.int32)
    indices = build_line_indices(offsets)
    restart = RESTART_INDEX
    assert indices.tolist() == [0, 1, restart, 2, 3, restart, 4, 5]
    assert not indices.flags.writeable


def test_build_line_indices_all_short_polylines_is_empty() -> None:
    offsets = np.array([0, 1, 2, 2], dtype=np.int32)
    indices = build_line_indices(offsets)
    assert indices.size == 0
    assert indices.dtype == np.uint32
