# どこで: `src/shapegrid/api/_params.py`。
# 何を: config.yaml の `params` 節と呼び出し側の指定から初期 GridParams を決める。
# なぜ: ウィンドウ実行とヘッドレス書き出しで同じ初期化規則を共有するため。

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import numpy as np

from shapegrid.core.parameters import GridParams
from shapegrid.core.runtime_config import runtime_config, set_config_path


def resolve_initial_params(
    params: GridParams | Mapping[str, Any] | None,
    *,
    config_path: str | Path | None,
) -> GridParams:
    """初期 GridParams を返す（config の params → 引数の順で後勝ち）。"""

    set_config_path(config_path)
    cfg = runtime_config()
    if isinstance(params, GridParams):
        return params
    resolved = GridParams.from_mapping(cfg.params)
    if params:
        resolved.apply(dict(params))
    return resolved


def make_rng(seed: int | None) -> np.random.Generator:
    return np.random.default_rng(seed)
