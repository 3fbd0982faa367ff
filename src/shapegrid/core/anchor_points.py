# どこで: `src/shapegrid/core/anchor_points.py`。
# 何を: 単位セル [-0.5, 0.5]^2 上の記号点名（pt1..pt4 / ptN_25..75 / center）を座標へ対応付ける。
# なぜ: 図形定義を「点名の列」として簡潔に宣言できるようにするため。

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

import numpy as np

# 角は左下→右下→右上→左上の順に巡回する。
_CORNERS: tuple[tuple[float, float], ...] = (
    (-0.5, -0.5),
    (0.5, -0.5),
    (0.5, 0.5),
    (-0.5, 0.5),
)
_EDGE_FRACTIONS = (25, 50, 75)


def _build_anchor_points() -> dict[str, tuple[float, float]]:
    points: dict[str, tuple[float, float]] = {}
    for i, (x0, y0) in enumerate(_CORNERS):
        x1, y1 = _CORNERS[(i + 1) % len(_CORNERS)]
        n = i + 1
        points[f"pt{n}"] = (x0, y0)
        # 角 N から角 N+1 へ向かう辺上の 25/50/75% 点。
        for pct in _EDGE_FRACTIONS:
            t = pct / 100.0
            points[f"pt{n}_{pct}"] = (x0 + (x1 - x0) * t, y0 + (y1 - y0) * t)
    points["center"] = (0.0, 0.0)
    return points


ANCHOR_POINTS: Mapping[str, tuple[float, float]] = MappingProxyType(
    _build_anchor_points()
)
"""点名 → (x, y) の読み取り専用マップ（4 角 + 辺上 12 点 + center）。"""


def anchor_point(name: str) -> tuple[float, float]:
    """点名に対応する単位セル座標を返す。

    Raises
    ------
    KeyError
        未定義の点名が指定された場合（図形定義側のバグとして即座に失敗させる）。
    """
    try:
        return ANCHOR_POINTS[name]
    except KeyError:
        raise KeyError(f"未定義のアンカー点名: {name!r}") from None


def anchor_points(names: Iterable[str]) -> np.ndarray:
    """点名列を shape (N, 2) の float32 配列へ変換して返す。"""
    coords = [anchor_point(name) for name in names]
    if not coords:
        return np.zeros((0, 2), dtype=np.float32)
    return np.asarray(coords, dtype=np.float32)


__all__ = ["ANCHOR_POINTS", "anchor_point", "anchor_points"]
