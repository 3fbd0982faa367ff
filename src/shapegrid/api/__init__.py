# どこで: `src/shapegrid/api/__init__.py`。
# 何を: 公開 API（run / export_snapshot）のエントリポイントを提供する。
# なぜ: ユーザーコードからシンプルに import でき、GUI 依存を使うときまで遅延させるため。

from __future__ import annotations

from .export import export_snapshot

__all__ = ["export_snapshot", "run"]


def run(*args, **kwargs):
    """公開 run API へのラッパ（遅延インポートで GUI 依存を後回しにする）。"""

    from .runner import run as _run

    return _run(*args, **kwargs)
