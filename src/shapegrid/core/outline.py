# どこで: `src/shapegrid/core/outline.py`。
# 何を: 図形 1 つ分の閉輪郭（外周 + 高々 1 つの穴）と、描画/出力用のポリライン束を定義する。
# なぜ: 図形カタログ・シーン・レンダラ・SVG 出力が同じ不変値型を共有できるようにするため。

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

ARC_SEGMENTS_PER_QUARTER = 12


def _as_ring(values: np.ndarray, *, label: str) -> np.ndarray:
    ring = np.asarray(values)
    if ring.ndim != 2 or ring.shape[1] != 2:
        raise ValueError(f"{label} は shape (N,2) の 2 次元配列である必要がある")
    if ring.shape[0] < 3:
        raise ValueError(f"{label} は 3 頂点以上である必要がある")
    if ring.dtype != np.float32:
        ring = ring.astype(np.float32, copy=False)
    if not np.all(np.isfinite(ring)):
        raise ValueError(f"{label} に非有限値が含まれている")
    return ring


@dataclass(frozen=True, slots=True)
class PolylineBatch:
    """複数ポリラインを coords/offsets でまとめた平坦表現。

    Parameters
    ----------
    coords : np.ndarray
        float32 型 shape (N, 2) の頂点配列。
    offsets : np.ndarray
        int32 型 shape (M+1,) のポリライン開始インデックス配列。
    """

    coords: np.ndarray
    offsets: np.ndarray

    def __post_init__(self) -> None:
        coords = np.asarray(self.coords)
        offsets = np.asarray(self.offsets)

        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError("coords は shape (N,2) の 2 次元配列である必要がある")
        if coords.dtype != np.float32:
            coords = coords.astype(np.float32, copy=False)
        if offsets.ndim != 1 or offsets.size == 0:
            raise ValueError("offsets は 1 要素以上の 1 次元配列である必要がある")
        if offsets.dtype != np.int32:
            offsets = offsets.astype(np.int32, copy=False)
        if offsets[0] != 0 or offsets[-1] != coords.shape[0]:
            raise ValueError("offsets は 0 で始まり coords 行数で終わる必要がある")
        if np.any(np.diff(offsets) < 0):
            raise ValueError("offsets は単調非減少である必要がある")

        coords.setflags(write=False)
        offsets.setflags(write=False)
        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "offsets", offsets)

    @property
    def polyline_count(self) -> int:
        return int(self.offsets.size - 1)

    def polylines(self) -> list[np.ndarray]:
        """各ポリライン（shape (K,2)）のビュー列を返す。"""
        return [
            self.coords[int(s) : int(e)]
            for s, e in zip(self.offsets[:-1], self.offsets[1:])
        ]


def empty_polylines() -> PolylineBatch:
    """ポリラインを 1 本も含まない PolylineBatch を返す。"""
    return PolylineBatch(
        coords=np.zeros((0, 2), dtype=np.float32),
        offsets=np.zeros((1,), dtype=np.int32),
    )


def concat_polylines(*batches: PolylineBatch) -> PolylineBatch:
    """複数の PolylineBatch を 1 つに連結する。"""
    if not batches:
        return empty_polylines()

    coords = np.concatenate([b.coords for b in batches], axis=0)
    new_offsets: list[int] = [0]
    base = 0
    for b in batches:
        # 先頭 0 を除いた部分だけをシフトして足し込む。
        new_offsets.extend((b.offsets[1:] + base).tolist())
        base += int(b.offsets[-1])
    return PolylineBatch(coords=coords, offsets=np.asarray(new_offsets, dtype=np.int32))


@dataclass(frozen=True, slots=True)
class Outline:
    """1 図形分の閉輪郭。

    Parameters
    ----------
    outer : np.ndarray
        float32 型 shape (N, 2) の外周リング。終点→始点の閉じは暗黙とする。
    hole : np.ndarray or None
        float32 型 shape (M, 2) の穴リング。穴なしは None。

    Notes
    -----
    座標は単位セル [-0.5, 0.5]^2 を基準とする。配列は writeable=False で保持する。
    """

    outer: np.ndarray
    hole: np.ndarray | None = None

    def __post_init__(self) -> None:
        outer = _as_ring(self.outer, label="outer")
        outer.setflags(write=False)
        object.__setattr__(self, "outer", outer)
        if self.hole is not None:
            hole = _as_ring(self.hole, label="hole")
            hole.setflags(write=False)
            object.__setattr__(self, "hole", hole)

    @property
    def has_hole(self) -> bool:
        return self.hole is not None

    def rings(self) -> tuple[np.ndarray, ...]:
        """外周、（あれば）穴の順にリングを返す。"""
        if self.hole is None:
            return (self.outer,)
        return (self.outer, self.hole)

    def polylines(self) -> PolylineBatch:
        """各リングを始点複製で明示的に閉じたポリライン束を返す。"""
        closed = [np.concatenate([r, r[:1]], axis=0) for r in self.rings()]
        offsets = [0]
        for ring in closed:
            offsets.append(offsets[-1] + int(ring.shape[0]))
        return PolylineBatch(
            coords=np.concatenate(closed, axis=0),
            offsets=np.asarray(offsets, dtype=np.int32),
        )

    def transformed(
        self,
        position: tuple[float, float],
        rotation: float,
        scale: float,
    ) -> PolylineBatch:
        """等方スケール → z 回転 → 平行移動を適用したワールド座標ポリラインを返す。"""
        return transform_polylines(self.polylines(), position, rotation, scale)


def transform_polylines(
    batch: PolylineBatch,
    position: tuple[float, float],
    rotation: float,
    scale: float,
) -> PolylineBatch:
    """PolylineBatch に等方スケール → z 回転 → 平行移動を適用して返す。"""
    c = math.cos(float(rotation))
    s = math.sin(float(rotation))
    sc = float(scale)
    # 行ベクトル [x, y] に右から掛ける回転行列。
    m = np.array([[c * sc, s * sc], [-s * sc, c * sc]], dtype=np.float32)
    world = batch.coords @ m + np.asarray(position, dtype=np.float32)
    return PolylineBatch(coords=world, offsets=batch.offsets)


def arc_points(
    radius: float,
    start: float,
    span: float,
    *,
    segments: int | None = None,
) -> np.ndarray:
    """中心原点の円弧上の点列（両端含む）を反時計回りで返す。

    Parameters
    ----------
    radius : float
        半径。
    start : float
        開始角 [rad]。
    span : float
        掃引角 [rad]。正で反時計回り。
    segments : int or None, optional
        分割数。None の場合は 1/4 周あたり ARC_SEGMENTS_PER_QUARTER 分割。
    """
    if segments is None:
        quarters = abs(float(span)) / (0.5 * math.pi)
        segments = max(1, int(math.ceil(quarters * ARC_SEGMENTS_PER_QUARTER - 1e-9)))
    angles = np.linspace(float(start), float(start) + float(span), num=int(segments) + 1)
    xy = np.stack([np.cos(angles), np.sin(angles)], axis=1) * float(radius)
    return xy.astype(np.float32)


def unit_square() -> Outline:
    """カタログ未登録時に使う既定の単位正方形を返す。"""
    return Outline(
        outer=np.array(
            [[-0.5, -0.5], [0.5, -0.5], [0.5, 0.5], [-0.5, 0.5]], dtype=np.float32
        )
    )


__all__ = [
    "ARC_SEGMENTS_PER_QUARTER",
    "Outline",
    "PolylineBatch",
    "arc_points",
    "concat_polylines",
    "empty_polylines",
    "transform_polylines",
    "unit_square",
]
