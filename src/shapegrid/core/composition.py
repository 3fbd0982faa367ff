# どこで: `src/shapegrid/core/composition.py`。
# 何を: 有効図形プールと randomness から合成グリッド（図形名の行優先配列）を生成する。
# なぜ: 表示グリッドとは独立したサイズの「割り当ての正本」を 1 か所で作るため。

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from shapegrid.core.shape_registry import DEFAULT_SHAPE

_logger = logging.getLogger(__name__)


def build_composition(
    *,
    width: int,
    height: int,
    pool: Sequence[str],
    randomness: float,
    rng: np.random.Generator,
) -> tuple[str, ...]:
    """合成グリッドを生成して返す。

    Parameters
    ----------
    width, height : int
        合成グリッドの寸法（どちらも 1 以上）。
    pool : Sequence[str]
        有効カテゴリの図形名（正準順）。空なら全セルが `Rect` になる。
    randomness : float
        各セルがプールから一様に選ばれる確率。外れた場合は `pool[0]` を割り当てる。
    rng : numpy.random.Generator
        一様乱数源。

    Returns
    -------
    tuple[str, ...]
        長さ `width * height` の図形名列。`index = y * width + x`。
    """
    w = int(width)
    h = int(height)
    if w < 1 or h < 1:
        raise ValueError(f"合成グリッドの寸法は 1 以上である必要がある: got={w}x{h}")
    n = w * h

    if not pool:
        _logger.debug("有効な図形カテゴリが無いため合成グリッドを %s で埋める", DEFAULT_SHAPE)
        return (DEFAULT_SHAPE,) * n

    # セルごとに r を 1 回引き、r < randomness のセルだけ一様選択の結果を採用する。
    r = rng.random(n)
    picks = rng.integers(0, len(pool), size=n)
    chosen = np.where(r < float(randomness), picks, 0)
    return tuple(pool[int(i)] for i in chosen)


__all__ = ["build_composition"]
