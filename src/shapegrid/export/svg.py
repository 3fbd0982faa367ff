"""
どこで: `src/shapegrid/export/svg.py`。
何を: 保持シーン（図形プリミティブ + グリッド線）を SVG として保存する関数を提供する。
なぜ: interactive 依存なしのヘッドレス書き出しで、現在のグリッドをファイルに残せるようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import numpy as np

from shapegrid.core.display_grid import grid_extent, view_scale
from shapegrid.core.parameters import GridParams, rgb255_to_hex
from shapegrid.core.scene import GRID_LAYER, RetainedScene

_logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3
_GRID_STROKE_WIDTH = 1.0


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _iter_polylines(*, coords: np.ndarray, offsets: np.ndarray) -> Iterator[np.ndarray]:
    """coords/offsets から polyline（shape (N,2)）を列挙する。"""
    for start, end in zip(offsets[:-1], offsets[1:]):
        start_i = int(start)
        end_i = int(end)
        if end_i - start_i < 2:
            continue
        yield coords[start_i:end_i, :2]


def _polyline_to_d(polyline_xy: np.ndarray, *, closed: bool) -> str:
    """polyline（shape (N,2)）を SVG path の d 属性へ変換して返す。

    closed=True の場合は末尾の閉じ点を落として `Z` で閉じる。
    """
    if closed and polyline_xy.shape[0] > 1 and np.array_equal(polyline_xy[0], polyline_xy[-1]):
        polyline_xy = polyline_xy[:-1]
    x0 = _fmt(polyline_xy[0, 0])
    y0 = _fmt(polyline_xy[0, 1])
    parts = [f"M {x0} {y0}"]
    for xy in polyline_xy[1:]:
        parts.append(f"L {_fmt(xy[0])} {_fmt(xy[1])}")
    if closed:
        parts.append("Z")
    return " ".join(parts)


def _to_canvas(coords: np.ndarray, *, scale: float, canvas_size: tuple[int, int]) -> np.ndarray:
    """ワールド座標（原点中心・y 上向き）を SVG 座標（左上原点・y 下向き）へ変換する。"""
    cw, ch = canvas_size
    out = np.empty_like(coords, dtype=np.float64)
    out[:, 0] = coords[:, 0] * scale + cw / 2.0
    out[:, 1] = ch / 2.0 - coords[:, 1] * scale
    return out


def export_svg(
    scene: RetainedScene,
    path: str | Path,
    *,
    params: GridParams,
    canvas_size: tuple[int, int],
) -> Path:
    """シーンを SVG として保存する。

    Parameters
    ----------
    scene : RetainedScene
        書き出す保持シーン。
    path : str or Path
        出力先パス。
    params : GridParams
        背景色とグリッドの物理サイズ（表示範囲）の取得に使う。
    canvas_size : tuple[int, int]
        キャンバス寸法 (width, height) [px]。

    Returns
    -------
    Path
        保存先パス。

    Raises
    ------
    ValueError
        canvas_size が非正の場合。

    Notes
    -----
    図形は `fill-rule="evenodd"` の塗りで書き出すため、穴付き輪郭は切り抜きになる。
    """
    _path = Path(path)
    canvas_w, canvas_h = int(canvas_size[0]), int(canvas_size[1])
    if canvas_w <= 0 or canvas_h <= 0:
        raise ValueError("canvas_size は正の値である必要がある")

    scale = view_scale(
        grid_extent(params.grid_width, params.grid_height, params.cell_size),
        (canvas_w, canvas_h),
    )

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {canvas_w} {canvas_h}" '
            f'width="{canvas_w}" height="{canvas_h}">'
        )
    )
    lines.append(
        f'  <rect width="{canvas_w}" height="{canvas_h}" '
        f'fill="{rgb255_to_hex(params.background_color)}" />'
    )

    shape_count = 0
    for primitive in scene.primitives():
        color = rgb255_to_hex(primitive.color)
        world = primitive.world_polylines()
        coords = _to_canvas(world.coords, scale=scale, canvas_size=(canvas_w, canvas_h))
        offsets = np.asarray(world.offsets, dtype=np.int32)

        if primitive.layer == GRID_LAYER or not primitive.is_closed:
            for polyline_xy in _iter_polylines(coords=coords, offsets=offsets):
                d = _polyline_to_d(polyline_xy, closed=False)
                lines.append(
                    f'  <path d="{d}" fill="none" stroke="{color}" '
                    f'stroke-width="{_fmt(_GRID_STROKE_WIDTH)}" />'
                )
            continue

        # 外周と穴を 1 つの path のサブパスとしてまとめる。
        d = " ".join(
            _polyline_to_d(polyline_xy, closed=True)
            for polyline_xy in _iter_polylines(coords=coords, offsets=offsets)
        )
        if not d:
            continue
        lines.append(f'  <path d="{d}" fill="{color}" fill-rule="evenodd" stroke="none" />')
        shape_count += 1

    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")

    _logger.debug("SVG を書き出した: path=%s shapes=%d", _path, shape_count)
    return _path


__all__ = ["export_svg"]
