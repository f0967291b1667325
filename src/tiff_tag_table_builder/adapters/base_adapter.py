"""タグ定義ページ用アダプタ（基底クラス）.

ページごとにテーブルの位置や列構成が違っても、共通インターフェース（rows/read）で
TagRecord 候補を取り出せるようにするための抽象基底クラスを定義します。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator

from tiff_tag_table_builder.core.normalize import normalize_row
from tiff_tag_table_builder.core.records import TagRecord


class BaseAdapter(ABC):
    """入力ページアダプタの基底クラス.

    サブクラスは rows() を実装し、read() は rows() の各行を正規化して返す。

    Attributes:
        source: ソースID（ログ・エラーメッセージ用）
    """

    source: str

    @abstractmethod
    def rows(self) -> Iterator[list[str]]:
        """タグを表すテーブル行をセル文字列のリストとして順に返す.

        Raises:
            StructureError: 想定したテーブル構造が見つからない場合
        """
        ...

    def read(self) -> Iterator[TagRecord]:
        """全行を TagRecord 候補（ifd 未決定）に変換して返す.

        Raises:
            StructureError: 想定したテーブル構造が見つからない場合
            ParseError: 行を変換できない場合
        """
        for cells in self.rows():
            yield normalize_row(cells, self.source)
