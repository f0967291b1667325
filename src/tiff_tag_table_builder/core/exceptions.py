"""Tag table builder exceptions.

パイプラインの各段階（取得・解析・検証・書き込み）で送出するカスタム例外を定義します。
どの例外も途中で握りつぶさず、CLI まで伝播させて非ゼロ終了にします。
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from tiff_tag_table_builder.core.records import TagRecord


class TagTableError(Exception):
    """タグテーブル生成の失敗を表す基底例外.

    Attributes:
        stage: 失敗した段階名（config/fetch/extract/normalize/accumulate/splice/report）
    """

    stage = "build"


class NetworkError(TagTableError):
    """ソースページを取得できなかった.

    Attributes:
        location: 取得対象のURL
        reason: 失敗理由（HTTPステータスや通信エラー）
    """

    stage = "fetch"

    def __init__(self, location: str, reason: str) -> None:
        self.location = location
        self.reason = reason
        super().__init__(f"Failed to fetch {location}: {reason}")


class StructureError(TagTableError):
    """ページ内の想定テーブル構造が見つからない（ページのレイアウトが変わった）.

    Attributes:
        source: ソースID
        step: 解決できなかった構造パスの段階
    """

    stage = "extract"

    def __init__(self, source: str, step: str) -> None:
        self.source = source
        self.step = step
        super().__init__(f"Unexpected page structure in {source}: could not resolve {step}")


class ParseError(TagTableError):
    """テーブル行をタグ定義に変換できない.

    Attributes:
        source: ソースID
        value: 変換に失敗した値（または行全体）
        reason: 失敗理由
    """

    stage = "normalize"

    def __init__(self, source: str, value: str, reason: str) -> None:
        self.source = source
        self.value = value
        self.reason = reason
        super().__init__(f"Malformed row in {source}: {reason} ({value!r})")


class ConflictError(TagTableError):
    """同じタグIDに異なる定義が存在する.

    Attributes:
        tag_id: 衝突したタグID
        existing: 先に登録された定義
        incoming: 後から来た定義
        source: 後から来た定義のソースID
    """

    stage = "accumulate"

    def __init__(self, tag_id: int, existing: TagRecord, incoming: TagRecord, source: str) -> None:
        self.tag_id = tag_id
        self.existing = existing
        self.incoming = incoming
        self.source = source
        message = (
            f"Tag {tag_id} already defined with a different definition (from {source}): "
            f"existing={existing.label!r} {existing.description!r}, "
            f"incoming={incoming.label!r} {incoming.description!r}"
        )
        super().__init__(message)


class TargetMissingError(TagTableError):
    """書き込み先のファイルが存在しない."""

    stage = "splice"

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Target file not found: {path}")


class MarkerNotFoundError(TagTableError):
    """書き込み先ファイルに生成コードのマーカー行が無い."""

    stage = "splice"

    def __init__(self, path: Path, marker: str) -> None:
        self.path = path
        self.marker = marker
        super().__init__(f"Marker {marker!r} not found in {path}")


class TargetWriteError(TagTableError):
    """書き込み先ファイルの読み書きに失敗した（権限不足・容量不足など）."""

    stage = "splice"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write {path}: {reason}")


class SourceConfigError(TagTableError):
    """sources.yml を読み込めない、または形式が不正."""

    stage = "config"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid sources config {path}: {reason}")


class ReportError(TagTableError):
    """CSV レポートを出力できない."""

    stage = "report"

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write reports to {path}: {reason}")
