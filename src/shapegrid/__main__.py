# どこで: `src/shapegrid/__main__.py`。
# 何を: `python -m shapegrid` のエントリポイント。
# なぜ: CLI 実装（`shapegrid.api.cli`）へ委譲するだけに留めるため。

from __future__ import annotations

from shapegrid.api.cli import main

raise SystemExit(main())
