"""タグ定義のデータモデル."""

from __future__ import annotations

from dataclasses import dataclass

# TIFF のタグIDは unsigned 16-bit
TAG_ID_MIN = 0
TAG_ID_MAX = 0xFFFF


@dataclass(frozen=True)
class TagRecord:
    """1つのタグ定義.

    ifd は正規化直後は None（未決定）で、レジストリ確定後に derive_ifd() で埋める。
    """

    id: int
    label: str
    description: str
    ifd: bool | None = None

    @property
    def hex_id(self) -> str:
        return f"0x{self.id:04X}"

    def same_definition(self, other: TagRecord) -> bool:
        """ifd を除いた定義内容（id/label/description）が一致するか."""
        return (self.id, self.label, self.description) == (other.id, other.label, other.description)
