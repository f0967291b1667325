"""テーブル行の正規化（HTMLセル → TagRecord）.

設計方針:
    - 列は位置で扱う（id, hex, label, description）。hex 列は id と重複するので使わない
    - 空白の整形は決定的に行い、文言そのものは変えない
    - 変換できない行は読み飛ばさず ParseError にする（黙って欠けたテーブルを作らない）
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from tiff_tag_table_builder.core.exceptions import ParseError
from tiff_tag_table_builder.core.records import TAG_ID_MAX, TAG_ID_MIN, TagRecord

# \s は NBSP（\xa0）も含む
_WHITESPACE = re.compile(r"\s+")

ROW_COLUMNS = ("id", "hex", "label", "description")


def normalize_text(text: str) -> str:
    """空白（改行・タブ・NBSP 含む）を1つのスペースに畳み、前後を除去する.

    Examples:
        >>> normalize_text("  Image\\n   Width ")
        'Image Width'
    """
    return _WHITESPACE.sub(" ", text).strip()


def parse_tag_id(text: str, source: str) -> int:
    """10進のタグID文字列を整数に変換する.

    Raises:
        ParseError: 数値でない、または unsigned 16-bit の範囲外
    """
    value = normalize_text(text)
    if not value.isascii() or not value.isdigit():
        raise ParseError(source, text, "tag id is not a decimal integer")

    tag_id = int(value)
    if not TAG_ID_MIN <= tag_id <= TAG_ID_MAX:
        raise ParseError(source, text, f"tag id out of range {TAG_ID_MIN}..{TAG_ID_MAX}")
    return tag_id


def normalize_row(cells: Sequence[str], source: str = "<unknown>") -> TagRecord:
    """1行分のセル文字列を TagRecord 候補に変換する.

    Args:
        cells: 行のセルテキスト（先頭4列を使用、それ以降は無視）
        source: エラーメッセージ用のソースID

    Returns:
        ifd 未決定（None）の TagRecord

    Raises:
        ParseError: 列数不足、または id 列が変換できない場合

    Examples:
        >>> normalize_row(["700", "0x02BC", "XMP", "XMP metadata"])
        TagRecord(id=700, label='XMP', description='XMP metadata', ifd=None)
    """
    if len(cells) < len(ROW_COLUMNS):
        raise ParseError(source, " | ".join(cells), f"expected {len(ROW_COLUMNS)} columns, got {len(cells)}")

    id_text, _hex, label, description = cells[: len(ROW_COLUMNS)]
    return TagRecord(
        id=parse_tag_id(id_text, source),
        label=normalize_text(label),
        description=normalize_text(description),
    )
