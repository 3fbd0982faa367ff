# どこで: `src/shapegrid/core/output_paths.py`。
# 何を: 書き出しファイル（SVG など）の既定保存先パスを決める。
# なぜ: `output/{kind}/` 配下に時刻入りのファイル名で整理し、上書き事故を避けるため。

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

from shapegrid.core.runtime_config import output_root_dir


def _sanitize_run_id(run_id: str) -> str:
    """run_id をファイル名の一部として使える形に正規化して返す。"""

    return re.sub(r"[^A-Za-z0-9._-]+", "_", str(run_id))


def _run_id_suffix(run_id: str | None) -> str:
    """run_id の接尾辞（例: `_v1`）を返す。未指定なら空文字を返す。"""

    if run_id is None:
        return ""
    s = str(run_id).strip()
    if not s:
        return ""
    sanitized = _sanitize_run_id(s)
    if not sanitized:
        return ""
    return f"_{sanitized}"


def output_path(
    *,
    kind: str,
    ext: str,
    run_id: str | None = None,
    now: datetime | None = None,
) -> Path:
    """`output_root/{kind}/shapegrid_<YYYYmmdd-HHMMSS>[_run_id].{ext}` を返す。"""

    ext_norm = str(ext).lstrip(".").strip()
    if not ext_norm:
        raise ValueError("ext は空でない必要がある")

    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
    filename = f"shapegrid_{stamp}{_run_id_suffix(run_id)}.{ext_norm}"
    return output_root_dir() / str(kind) / filename


__all__ = ["output_path"]
