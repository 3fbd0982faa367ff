# どこで: `src/shapegrid/interactive/runtime/frame_clock.py`。
# 何を: `ShapeGrid.tick(delta)` に渡すフレーム間の経過秒を生成する。
# なぜ: アニメーションエンジン自身は時間を計らず、外部から delta を受け取る設計のため。

from __future__ import annotations

import time
from typing import Callable


class DeltaClock:
    """実時間ベースのフレーム間隔時計。

    Notes
    -----
    `delta()` は前回呼び出しからの `perf_counter()` 差分（秒）。初回は生成時刻からの差分。
    ウィンドウのドラッグ等で長く止まった後の跳びを抑えるため、`max_delta` で上限を切る。
    """

    def __init__(
        self,
        *,
        max_delta: float = 0.25,
        now: Callable[[], float] = time.perf_counter,
    ) -> None:
        _max = float(max_delta)
        if _max <= 0:
            raise ValueError("max_delta は正の値である必要がある")
        self._max_delta = _max
        self._now = now
        self._last = float(now())

    def delta(self) -> float:
        """前回からの経過秒を返し、基準時刻を更新する。"""

        current = float(self._now())
        dt = current - self._last
        self._last = current
        if dt < 0.0:
            return 0.0
        return min(dt, self._max_delta)

    def reset(self) -> None:
        """基準時刻を現在に合わせる（次の delta は 0 付近になる）。"""

        self._last = float(self._now())
