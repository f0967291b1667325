"""タグレジストリの構築（全ソースの統合と一意性検証）.

ソースは登録順に畳み込む（fold）。後のソースは前のソースまでの統合結果を見て衝突を判定するため、
順序を入れ替えたり並列化したりしない。

- 未登録のID: 追加
- 登録済みで定義が異なる: ConflictError（どちらが正しいか機械的に決められない）
- 登録済みで定義が同一: 追加しない。ただし上流の変化に気付けるよう警告ログと duplicates に残す
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace

from loguru import logger

from tiff_tag_table_builder.core.exceptions import ConflictError
from tiff_tag_table_builder.core.records import TagRecord

_IFD_LABEL = re.compile(r"IFD")


@dataclass(frozen=True)
class Duplicate:
    """同一定義の再登録（エラーにはしないが記録する）."""

    tag_id: int
    first_source: str
    source: str


@dataclass(frozen=True)
class TagRegistry:
    """統合途中のタグレジストリ（不変値）.

    accumulate() は常に新しい TagRegistry を返し、引数側は変更しない。
    """

    records: Mapping[int, TagRecord] = field(default_factory=dict)
    origins: Mapping[int, str] = field(default_factory=dict)
    duplicates: tuple[Duplicate, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, tag_id: object) -> bool:
        return tag_id in self.records


def accumulate(registry: TagRegistry, candidates: Iterable[TagRecord], source: str) -> TagRegistry:
    """1ソース分の候補をレジストリへ統合する.

    Args:
        registry: これまでのソースの統合結果
        candidates: 正規化済みの TagRecord 候補
        source: 候補のソースID

    Returns:
        統合後の新しい TagRegistry

    Raises:
        ConflictError: 既存IDと異なる定義が来た場合
    """
    records = dict(registry.records)
    origins = dict(registry.origins)
    duplicates = list(registry.duplicates)
    added = 0

    for candidate in candidates:
        existing = records.get(candidate.id)
        if existing is None:
            records[candidate.id] = candidate
            origins[candidate.id] = source
            added += 1
            continue

        if not existing.same_definition(candidate):
            raise ConflictError(candidate.id, existing, candidate, source)

        first_source = origins[candidate.id]
        logger.warning(
            f"Duplicate but identical tag {candidate.id} ({candidate.label}) in {source}, "
            f"first seen in {first_source}"
        )
        duplicates.append(Duplicate(tag_id=candidate.id, first_source=first_source, source=source))

    logger.info(f"Accumulated {added} tags from {source} (total {len(records)})")
    return TagRegistry(records=records, origins=origins, duplicates=tuple(duplicates))


def derive_ifd(record: TagRecord) -> TagRecord:
    """ラベルに "IFD"（大文字小文字区別）を含むタグを IFD ポインタとして印を付ける.

    Examples:
        >>> derive_ifd(TagRecord(34853, "GPSInfo IFD Pointer", "")).ifd
        True
        >>> derive_ifd(TagRecord(256, "ImageWidth", "")).ifd
        False
    """
    return replace(record, ifd=_IFD_LABEL.search(record.label) is not None)


def finalize(registry: TagRegistry) -> dict[int, TagRecord]:
    """ifd を確定させ、ID昇順の辞書として返す（出力の再現性のため順序を固定）."""
    return {tag_id: derive_ifd(registry.records[tag_id]) for tag_id in sorted(registry.records)}
