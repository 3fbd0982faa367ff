"""LineMesh のバッファ容量計算のテスト（GPU なし）。"""

from __future__ import annotations

import pytest

from shapegrid.interactive.gl.line_mesh import buffer_capacity


@pytest.mark.parametrize(
    ("nbytes", "expected"),
    [
        (0, 64 * 1024),
        (64 * 1024, 64 * 1024),
        (64 * 1024 + 1, 128 * 1024),
        (900 * 1024, 1024 * 1024),
    ],
)
def test_buffer_capacity_rounds_up_to_power_of_two(nbytes: int, expected: int) -> None:
    assert buffer_capacity(nbytes) == expected
