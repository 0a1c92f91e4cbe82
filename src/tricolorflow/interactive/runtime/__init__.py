# どこで: `src/tricolorflow/interactive/runtime/__init__.py`。
# 何を: interactive 実行時の「ループ/サブシステム」実装をまとめるパッケージ定義。
# なぜ: `api/runner.py` を配線だけに保ち、フレーム駆動の各部品を個別に差し替えやすくするため。

from __future__ import annotations

__all__ = []
