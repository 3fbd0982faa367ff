# どこで: `src/shapegrid/interactive/gl/line_mesh.py`。
# 何を: 1 レイヤー分の PolylineBatch を VBO/IBO に載せ、LINE_STRIP で描く LineMesh を提供する。
# なぜ: バッファの拡張と VAO の張り直しを DrawRenderer から隠すため。

from __future__ import annotations

from typing import Any

import moderngl
import numpy as np

from shapegrid.core.outline import PolylineBatch
from shapegrid.interactive.gl.index_buffer import RESTART_INDEX, build_line_indices

_MIN_BUFFER_BYTES = 64 * 1024


def buffer_capacity(nbytes: int) -> int:
    """nbytes 以上で最小の 2 の冪（下限 `_MIN_BUFFER_BYTES`）を返す。"""
    capacity = _MIN_BUFFER_BYTES
    while capacity < nbytes:
        capacity *= 2
    return capacity


class LineMesh:
    """`in_vert` (vec2) を受け取るプログラム用のライン描画メッシュ。"""

    def __init__(self, ctx: Any, program: Any) -> None:
        self._ctx = ctx
        self._program = program
        self._vbo = ctx.buffer(reserve=_MIN_BUFFER_BYTES, dynamic=True)
        self._ibo = ctx.buffer(reserve=_MIN_BUFFER_BYTES, dynamic=True)
        self._vao = self._bind()
        self.index_count = 0
        ctx.primitive_restart = True
        ctx.primitive_restart_index = RESTART_INDEX

    def _bind(self) -> Any:
        return self._ctx.simple_vertex_array(
            self._program, self._vbo, "in_vert", index_buffer=self._ibo
        )

    def upload(self, batch: PolylineBatch) -> int:
        """batch を GPU へ転送し、描画するインデックス数を返す（0 なら何も送らない）。"""
        indices = build_line_indices(batch.offsets)
        self.index_count = int(indices.size)
        if self.index_count == 0:
            return 0

        vertices = np.ascontiguousarray(batch.coords, dtype=np.float32)
        rebind = False
        if vertices.nbytes > self._vbo.size:
            self._vbo.release()
            self._vbo = self._ctx.buffer(reserve=buffer_capacity(vertices.nbytes), dynamic=True)
            rebind = True
        if indices.nbytes > self._ibo.size:
            self._ibo.release()
            self._ibo = self._ctx.buffer(reserve=buffer_capacity(indices.nbytes), dynamic=True)
            rebind = True
        if rebind:
            self._vao.release()
            self._vao = self._bind()

        self._vbo.orphan()
        self._vbo.write(vertices)
        self._ibo.orphan()
        self._ibo.write(indices)
        return self.index_count

    def render(self) -> None:
        """直近の upload 内容を描く。"""
        if self.index_count:
            self._vao.render(mode=moderngl.LINE_STRIP, vertices=self.index_count)

    def release(self) -> None:
        self._vao.release()
        self._vbo.release()
        self._ibo.release()


__all__ = ["LineMesh", "buffer_capacity"]
