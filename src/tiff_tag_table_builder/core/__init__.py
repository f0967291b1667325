"""タグテーブル構築のコア処理群.

- 正規化（テーブル行 → TagRecord）
- 統合（ソース横断のID一意性検証）
- IFD フラグの導出
"""

from .exceptions import (
    ConflictError,
    MarkerNotFoundError,
    NetworkError,
    ParseError,
    ReportError,
    SourceConfigError,
    StructureError,
    TagTableError,
    TargetMissingError,
    TargetWriteError,
)
from .normalize import normalize_row, normalize_text
from .records import TagRecord
from .registry import TagRegistry, accumulate, derive_ifd, finalize

__all__ = [
    "TagRecord",
    "TagRegistry",
    "normalize_row",
    "normalize_text",
    "accumulate",
    "derive_ifd",
    "finalize",
    "TagTableError",
    "NetworkError",
    "StructureError",
    "ParseError",
    "ConflictError",
    "TargetMissingError",
    "MarkerNotFoundError",
    "TargetWriteError",
    "SourceConfigError",
    "ReportError",
]
