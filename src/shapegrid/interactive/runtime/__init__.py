# どこで: `src/shapegrid/interactive/runtime/__init__.py`。
# 何を: interactive 実行時の「ループ/サブシステム」実装をまとめるパッケージ定義。
# なぜ: `src/shapegrid/api/runner.py` を配線に寄せ、責務ごとの実装を分けるため。

from __future__ import annotations

__all__ = []
