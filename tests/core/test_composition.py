"""合成グリッド生成（`shapegrid.core.composition`）のテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from shapegrid.core.catalog import ShapeCategory, available_shape_names
from shapegrid.core.composition import build_composition


def _pool() -> tuple[str, ...]:
    return available_shape_names({c: True for c in ShapeCategory})


def test_length_is_width_times_height() -> None:
    comp = build_composition(
        width=5, height=3, pool=_pool(), randomness=1.0, rng=np.random.default_rng(0)
    )
    assert len(comp) == 15
    assert set(comp) <= set(_pool())


def test_zero_randomness_uses_first_pool_entry() -> None:
    comp = build_composition(
        width=30, height=30, pool=_pool(), randomness=0.0, rng=np.random.default_rng(1)
    )
    assert set(comp) == {"triangle_UP"}


def test_empty_pool_fills_with_rect() -> None:
    comp = build_composition(
        width=4, height=4, pool=(), randomness=1.0, rng=np.random.default_rng(2)
    )
    assert comp == ("Rect",) * 16


def test_same_seed_gives_same_composition() -> None:
    a = build_composition(
        width=8, height=8, pool=_pool(), randomness=0.5, rng=np.random.default_rng(42)
    )
    b = build_composition(
        width=8, height=8, pool=_pool(), randomness=0.5, rng=np.random.default_rng(42)
    )
    assert a == b


def test_full_randomness_is_roughly_uniform() -> None:
    pool = ("a", "b", "c", "d")
    comp = build_composition(
        width=100, height=100, pool=pool, randomness=1.0, rng=np.random.default_rng(3)
    )
    counts = np.array([comp.count(name) for name in pool])
    assert np.all(np.abs(counts - 2500) < 250)


def test_partial_randomness_biases_towards_first_entry() -> None:
    pool = ("a", "b", "c", "d")
    comp = build_composition(
        width=100, height=100, pool=pool, randomness=0.5, rng=np.random.default_rng(4)
    )
    # P(a) = 0.5 + 0.5 / 4 = 0.625
    assert comp.count("a") / len(comp) == pytest.approx(0.625, abs=0.03)


@pytest.mark.parametrize(("w", "h"), [(0, 3), (3, 0)])
def test_rejects_empty_dimensions(w: int, h: int) -> None:
    with pytest.raises(ValueError):
        build_composition(
            width=w, height=h, pool=_pool(), randomness=1.0, rng=np.random.default_rng(0)
        )
