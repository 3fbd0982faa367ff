# どこで: `src/shapegrid/core/display_grid.py`。
# 何を: 表示グリッドの各セルが合成グリッドのどこを参照するか（ダウンサンプル）と、セルの基準配置を計算する。
# なぜ: 表示グリッドのサイズを合成グリッドから独立させ、どちら向きの寸法差でも常に全セルを埋めるため。

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from shapegrid.core.outline import PolylineBatch
from shapegrid.core.shape_registry import DEFAULT_SHAPE

if TYPE_CHECKING:
    from shapegrid.core.parameters import GridParams
    from shapegrid.core.scene import ScenePrimitive

_logger = logging.getLogger(__name__)


def sample_index(
    x: int,
    y: int,
    *,
    grid_size: tuple[int, int],
    composition_size: tuple[int, int],
) -> int:
    """表示セル (x, y) が参照する合成グリッドの行優先インデックスを返す。

    Notes
    -----
    `compX = floor(x / gridWidth * compositionWidth)` を整数演算で評価する。
    結果は常に `[0, compositionWidth * compositionHeight)` にクランプされる。
    """
    gw, gh = int(grid_size[0]), int(grid_size[1])
    cw, ch = int(composition_size[0]), int(composition_size[1])
    if gw < 1 or gh < 1 or cw < 1 or ch < 1:
        return 0

    comp_x = (int(x) * cw) // gw
    comp_y = (int(y) * ch) // gh
    comp_x = min(max(comp_x, 0), cw - 1)
    comp_y = min(max(comp_y, 0), ch - 1)
    return comp_y * cw + comp_x


def sample_shape(
    composition: Sequence[str | None],
    x: int,
    y: int,
    *,
    grid_size: tuple[int, int],
    composition_size: tuple[int, int],
) -> str:
    """表示セル (x, y) の図形名を合成グリッドから読む。

    範囲外・未設定のエントリは `Rect` にフォールバックする（例外は投げない）。
    """
    index = sample_index(x, y, grid_size=grid_size, composition_size=composition_size)
    if 0 <= index < len(composition):
        name = composition[index]
        if name:
            return name
    return DEFAULT_SHAPE


def base_position(
    x: int,
    y: int,
    *,
    grid_width: int,
    grid_height: int,
    cell_size: float,
) -> tuple[float, float]:
    """セル (x, y) の基準中心座標を返す（グリッド中心が原点）。"""
    cs = float(cell_size)
    return (
        (x - grid_width / 2.0 + 0.5) * cs,
        (y - grid_height / 2.0 + 0.5) * cs,
    )


@dataclass(slots=True)
class DisplayCell:
    """表示グリッドの 1 セル。

    Attributes
    ----------
    x, y : int
        表示グリッド上の整数座標。
    current_shape : str
        現在表示中の図形名。シェイプ循環で同名なら差し替えを省く判定に使う。
    position : tuple[float, float]
        現在の中心座標。
    rotation : float
        z 軸回転 [rad]。
    scale : float
        等方スケール。
    primitive : ScenePrimitive or None
        シーンに追加済みの描画プリミティブ。
    """

    x: int
    y: int
    current_shape: str
    position: tuple[float, float]
    rotation: float = 0.0
    scale: float = 1.0
    primitive: "ScenePrimitive | None" = None


def build_display_cells(
    params: "GridParams",
    composition: Sequence[str | None],
) -> list[DisplayCell]:
    """GridParams と合成グリッドから表示セル列（行優先）を生成する。

    各セルは基準配置・回転 0・スケール cell_size で作られ、primitive は未割り当て。
    """
    gw = int(params.grid_width)
    gh = int(params.grid_height)
    grid_size = (gw, gh)
    composition_size = (int(params.composition_width), int(params.composition_height))
    cs = float(params.cell_size)

    cells: list[DisplayCell] = []
    for y in range(gh):
        for x in range(gw):
            cells.append(
                DisplayCell(
                    x=x,
                    y=y,
                    current_shape=sample_shape(
                        composition,
                        x,
                        y,
                        grid_size=grid_size,
                        composition_size=composition_size,
                    ),
                    position=base_position(
                        x, y, grid_width=gw, grid_height=gh, cell_size=cs
                    ),
                    rotation=0.0,
                    scale=cs,
                )
            )
    _logger.debug("表示グリッドを構築: %dx%d (合成 %dx%d)", gw, gh, *composition_size)
    return cells


def grid_extent(grid_width: int, grid_height: int, cell_size: float) -> tuple[float, float]:
    """グリッド全体の物理サイズ (幅, 高さ) を返す。グリッド中心が原点。"""
    cs = float(cell_size)
    return int(grid_width) * cs, int(grid_height) * cs


def view_scale(
    extent: tuple[float, float],
    canvas_size: tuple[int, int],
    *,
    margin: float = 0.05,
) -> float:
    """物理サイズ extent をキャンバスへ余白付きで収める「1 単位あたりのピクセル数」を返す。"""
    ew = max(float(extent[0]), 1e-9)
    eh = max(float(extent[1]), 1e-9)
    cw, ch = float(canvas_size[0]), float(canvas_size[1])
    fit = min(cw / ew, ch / eh)
    return fit * (1.0 - 2.0 * float(margin))


def grid_line_segments(grid_width: int, grid_height: int, cell_size: float) -> PolylineBatch:
    """デバッグ用グリッド線（縦 gridWidth+1 本、横 gridHeight+1 本）を返す。"""
    gw = int(grid_width)
    gh = int(grid_height)
    cs = float(cell_size)
    half_w = gw / 2.0 * cs
    half_h = gh / 2.0 * cs

    xs = (np.arange(gw + 1, dtype=np.float64) - gw / 2.0) * cs
    ys = (np.arange(gh + 1, dtype=np.float64) - gh / 2.0) * cs

    vertical = np.empty((gw + 1, 2, 2), dtype=np.float32)
    vertical[:, :, 0] = xs[:, None]
    vertical[:, 0, 1] = -half_h
    vertical[:, 1, 1] = half_h

    horizontal = np.empty((gh + 1, 2, 2), dtype=np.float32)
    horizontal[:, 0, 0] = -half_w
    horizontal[:, 1, 0] = half_w
    horizontal[:, :, 1] = ys[:, None]

    segments = np.concatenate([vertical, horizontal], axis=0)
    count = int(segments.shape[0])
    return PolylineBatch(
        coords=segments.reshape(-1, 2),
        offsets=np.arange(0, 2 * count + 1, 2, dtype=np.int32),
    )


__all__ = [
    "DisplayCell",
    "base_position",
    "build_display_cells",
    "grid_extent",
    "grid_line_segments",
    "sample_index",
    "sample_shape",
    "view_scale",
]
