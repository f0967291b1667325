"""タグ定義ページ用のアダプタ群."""

from .awaresystems_adapter import AwareSystemsTableAdapter
from .base_adapter import BaseAdapter

__all__ = [
    "BaseAdapter",
    "AwareSystemsTableAdapter",
]
