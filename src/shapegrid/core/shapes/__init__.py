# どこで: `src/shapegrid/core/shapes/__init__.py`。
# 何を: 組み込み図形モジュールを import し、レジストリへの登録を確定させる。
# なぜ: import 順（直線図形 → 円弧図形）がそのまま正準順になるため、順序を 1 箇所に固定する。

from __future__ import annotations

from . import polygons as _polygons  # noqa: F401
from . import ellipses as _ellipses  # noqa: F401
