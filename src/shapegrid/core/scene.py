# どこで: `src/shapegrid/core/scene.py`。
# 何を: グリッドエンジンが操作する保持モードのシーン（追加/削除/破棄/変換/ジオメトリ差し替え）を定義する。
# なぜ: エンジンを描画バックエンドから切り離し、レンダラと SVG 出力が同じシーンを読めるようにするため。

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from shapegrid.core.outline import (
    Outline,
    PolylineBatch,
    concat_polylines,
    transform_polylines,
)

_logger = logging.getLogger(__name__)

RGB255 = tuple[int, int, int]

SHAPE_LAYER = "shapes"
GRID_LAYER = "grid"
_LAYER_ORDER = (SHAPE_LAYER, GRID_LAYER)


@dataclass(eq=False, slots=True)
class ScenePrimitive:
    """シーン上の描画プリミティブ 1 つ分。

    Attributes
    ----------
    geometry : Outline or PolylineBatch
        ローカル座標のジオメトリ。Outline は閉輪郭として、PolylineBatch は開いた線として扱う。
    color : tuple[int, int, int]
        RGB255 の線/塗り色。
    position, rotation, scale
        ワールド変換（等方スケール → z 回転 → 平行移動）。
    layer : str
        描画レイヤ名（"shapes" が先、"grid" が後）。
    disposed : bool
        ジオメトリ解放済みフラグ。
    """

    geometry: Outline | PolylineBatch
    color: RGB255
    position: tuple[float, float] = (0.0, 0.0)
    rotation: float = 0.0
    scale: float = 1.0
    layer: str = SHAPE_LAYER
    disposed: bool = False

    @property
    def is_closed(self) -> bool:
        return isinstance(self.geometry, Outline)

    def world_polylines(self) -> PolylineBatch:
        """ワールド座標のポリライン束を返す。"""
        local = (
            self.geometry.polylines()
            if isinstance(self.geometry, Outline)
            else self.geometry
        )
        return transform_polylines(local, self.position, self.rotation, self.scale)


class SceneAdapter(Protocol):
    """グリッドエンジンが要求するシーン操作。"""

    def add(self, primitive: ScenePrimitive) -> None: ...

    def remove(self, primitive: ScenePrimitive) -> None: ...

    def dispose(self, primitive: ScenePrimitive) -> None: ...

    def set_transform(
        self,
        primitive: ScenePrimitive,
        *,
        position: tuple[float, float],
        rotation: float,
        scale: float,
    ) -> None: ...

    def replace_geometry(
        self,
        primitive: ScenePrimitive,
        geometry: Outline | PolylineBatch,
        *,
        color: RGB255 | None = None,
    ) -> None: ...


@dataclass(frozen=True, slots=True)
class RealizedLayer:
    """同一レイヤ・同一色のプリミティブをワールド座標で連結した描画単位。"""

    layer: str
    color: RGB255
    batch: PolylineBatch


@dataclass(slots=True)
class RetainedScene:
    """SceneAdapter の既定実装（プロセス内の保持リスト）。

    Notes
    -----
    破棄済みプリミティブの再追加・二重破棄はプログラミングエラーとして RuntimeError を送出する。
    """

    _primitives: list[ScenePrimitive] = field(default_factory=list)
    _disposed_total: int = 0

    @property
    def live_count(self) -> int:
        """シーンに追加されている（削除されていない）プリミティブ数。"""
        return len(self._primitives)

    @property
    def disposed_total(self) -> int:
        """これまでに破棄されたプリミティブの累計。"""
        return self._disposed_total

    def primitives(self, layer: str | None = None) -> list[ScenePrimitive]:
        if layer is None:
            return list(self._primitives)
        return [p for p in self._primitives if p.layer == layer]

    def add(self, primitive: ScenePrimitive) -> None:
        if primitive.disposed:
            raise RuntimeError("破棄済みのプリミティブはシーンへ追加できない")
        self._primitives.append(primitive)

    def remove(self, primitive: ScenePrimitive) -> None:
        try:
            self._primitives.remove(primitive)
        except ValueError:
            raise RuntimeError("シーンに存在しないプリミティブを削除しようとした") from None

    def dispose(self, primitive: ScenePrimitive) -> None:
        if primitive.disposed:
            raise RuntimeError("プリミティブは既に破棄されている")
        primitive.disposed = True
        self._disposed_total += 1

    def set_transform(
        self,
        primitive: ScenePrimitive,
        *,
        position: tuple[float, float],
        rotation: float,
        scale: float,
    ) -> None:
        primitive.position = (float(position[0]), float(position[1]))
        primitive.rotation = float(rotation)
        primitive.scale = float(scale)

    def replace_geometry(
        self,
        primitive: ScenePrimitive,
        geometry: Outline | PolylineBatch,
        *,
        color: RGB255 | None = None,
    ) -> None:
        if primitive.disposed:
            raise RuntimeError("破棄済みのプリミティブのジオメトリは差し替えられない")
        # ジオメトリと色を 1 回の代入で切り替え、途中状態を作らない。
        primitive.geometry = geometry
        if color is not None:
            primitive.color = color

    def clear(self) -> None:
        """全プリミティブを破棄してシーンから外す。"""
        for primitive in list(self._primitives):
            self.dispose(primitive)
            self.remove(primitive)

    def realize(self) -> list[RealizedLayer]:
        """レイヤ順・色ごとにワールド座標のポリライン束へまとめて返す。"""
        grouped: dict[tuple[str, RGB255], list[PolylineBatch]] = {}
        for primitive in self._primitives:
            key = (primitive.layer, primitive.color)
            grouped.setdefault(key, []).append(primitive.world_polylines())

        def _order(key: tuple[str, RGB255]) -> int:
            layer = key[0]
            return _LAYER_ORDER.index(layer) if layer in _LAYER_ORDER else len(_LAYER_ORDER)

        layers: list[RealizedLayer] = []
        for key in sorted(grouped, key=_order):
            layers.append(
                RealizedLayer(
                    layer=key[0],
                    color=key[1],
                    batch=concat_polylines(*grouped[key]),
                )
            )
        return layers


__all__ = [
    "GRID_LAYER",
    "RealizedLayer",
    "RetainedScene",
    "SHAPE_LAYER",
    "SceneAdapter",
    "ScenePrimitive",
]
