from __future__ import annotations

# どこで: `src/shapegrid/interactive/gl/utils.py`。
# 何を: 描画で使う小さなユーティリティ（投影行列生成）を提供する。
# なぜ: renderer とテストで座標系の定義を一箇所に集約するため。

import numpy as np


def build_projection(view_width: float, view_height: float) -> "np.ndarray":
    """原点中心・y 上向きのワールド座標を NDC へ写す正射影行列（ModernGL 用の転置済み）を返す。

    `view_width` x `view_height` の範囲が [-1, 1]^2 に収まる。
    """
    if view_width <= 0 or view_height <= 0:
        raise ValueError("view の寸法は正の値である必要がある")
    proj = np.array(
        [
            [2 / view_width, 0, 0, 0],
            [0, 2 / view_height, 0, 0],
            [0, 0, -1, 0],
            [0, 0, 0, 1],
        ],
        dtype="f4",
    ).T
    return proj
