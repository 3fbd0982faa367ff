# どこで: `src/shapegrid/interactive/gl/index_buffer.py`。
# 何を: PolylineBatch.offsets から、primitive restart で区切った GL_LINE_STRIP 用インデックスを作る。
# なぜ: 表示グリッド全体（数百〜数千輪郭）を 1 回の draw call で描くため。GPU なしでテストできる純関数に保つ。

from __future__ import annotations

from functools import lru_cache

import numpy as np
from numba import njit  # type: ignore[attr-defined]

RESTART_INDEX = 0xFFFFFFFF
"""輪郭の区切りに挿入するインデックス（uint32 の最大値）。"""


def build_line_indices(offsets: np.ndarray) -> np.ndarray:
    """offsets からインデックス列（読み取り専用 uint32）を返す。

    2 頂点未満の輪郭は捨てる。結果は offsets の内容で LRU キャッシュされ、
    図形の差し替えがないフレームでは同じ配列が返る。
    """
    offsets_i32 = np.asarray(offsets, dtype=np.int32)
    if offsets_i32.size < 2:
        return np.zeros((0,), dtype=np.uint32)
    return _indices_for(offsets_i32.tobytes())


@lru_cache(maxsize=64)
def _indices_for(offsets_bytes: bytes) -> np.ndarray:
    offsets = np.frombuffer(offsets_bytes, dtype=np.int32)
    starts = offsets[:-1]
    lengths = np.diff(offsets)
    keep = lengths >= 2
    if not keep.any():
        out = np.zeros((0,), dtype=np.uint32)
    else:
        out = _fill_strips(
            np.ascontiguousarray(starts[keep]),
            np.ascontiguousarray(lengths[keep]),
            np.uint32(RESTART_INDEX),
        )
    out.setflags(write=False)
    return out


@njit(cache=True)  # type: ignore[misc]
def _fill_strips(starts: np.ndarray, lengths: np.ndarray, restart: np.uint32) -> np.ndarray:
    count = starts.shape[0]
    out = np.empty((lengths.sum() + count - 1,), dtype=np.uint32)
    cursor = 0
    for k in range(count):
        if k > 0:
            out[cursor] = restart
            cursor += 1
        for j in range(lengths[k]):
            out[cursor] = starts[k] + j
            cursor += 1
    return out


__all__ = ["RESTART_INDEX", "build_line_indices"]
