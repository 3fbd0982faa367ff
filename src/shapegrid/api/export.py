"""
どこで: `src/shapegrid/api/export.py`。
何を: ウィンドウを開かずにグリッドを構築し、SVG スナップショットを保存する導線を提供する。
なぜ: 同じ seed とパラメータから同じ図を再現し、CI 等でも書き出せるようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from shapegrid.core.parameters import GridParams
from shapegrid.core.runtime_config import runtime_config
from shapegrid.core.scene import RetainedScene
from shapegrid.core.shape_grid import ShapeGrid
from shapegrid.export.svg import export_svg

from ._params import make_rng, resolve_initial_params

_logger = logging.getLogger(__name__)


def export_snapshot(
    path: str | Path,
    *,
    params: GridParams | Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
    seed: int | None = None,
    elapsed: float = 0.0,
    frame_delta: float = 1.0 / 60.0,
    canvas_size: tuple[int, int] | None = None,
) -> Path:
    """グリッドを構築して `elapsed` 秒ぶんアニメーションを進め、SVG として保存する。

    Parameters
    ----------
    path : str or Path
        出力先パス。
    params : GridParams or Mapping or None
        初期パラメータ。Mapping の場合は config の `params` に上書きする。
    config_path : str or Path or None
        config.yaml の明示パス。
    seed : int or None
        合成グリッドの乱数 seed。
    elapsed : float
        書き出し前に進める実時間 [s]。アニメーションが無効なら効果はない。
    frame_delta : float
        `elapsed` を刻むフレーム間隔 [s]。
    canvas_size : tuple[int, int] or None
        None の場合は config の `canvas.size`。

    Returns
    -------
    Path
        保存先パス。
    """

    resolved = resolve_initial_params(params, config_path=config_path)
    cfg = runtime_config()
    scene = RetainedScene()
    grid = ShapeGrid(resolved, scene, rng=make_rng(seed))

    step = float(frame_delta)
    if step <= 0:
        raise ValueError("frame_delta は正の値である必要がある")
    remaining = float(elapsed)
    while remaining > 1e-12:
        dt = min(step, remaining)
        grid.tick(dt)
        remaining -= dt

    out = export_svg(
        scene,
        path,
        params=grid.params,
        canvas_size=canvas_size if canvas_size is not None else cfg.canvas_size,
    )
    _logger.info("Saved SVG snapshot: %s", out)
    return out
