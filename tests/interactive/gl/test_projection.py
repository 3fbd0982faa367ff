"""interactive.gl.utils の `build_projection` をテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from shapegrid.interactive.gl.utils import build_projection


def _apply(proj: np.ndarray, x: float, y: float) -> np.ndarray:
    # ModernGL 用に転置済みなので、列ベクトル変換は proj.T @ v になる。
    v = np.array([x, y, 0.0, 1.0], dtype=np.float32)
    return proj.T @ v


def test_projection_maps_view_edges_to_ndc() -> None:
    proj = build_projection(10.0, 4.0)
    assert proj.dtype == np.float32
    np.testing.assert_allclose(_apply(proj, 5.0, 2.0)[:2], [1.0, 1.0])
    np.testing.assert_allclose(_apply(proj, -5.0, -2.0)[:2], [-1.0, -1.0])
    np.testing.assert_allclose(_apply(proj, 0.0, 0.0)[:2], [0.0, 0.0])


@pytest.mark.parametrize(("w", "h"), [(0.0, 1.0), (1.0, -1.0)])
def test_projection_rejects_non_positive_view(w: float, h: float) -> None:
    with pytest.raises(ValueError):
        build_projection(w, h)
