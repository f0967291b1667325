"""tiff_tag_table_builder: TIFF タグ定義ページから静的タグテーブルを生成する."""

from tiff_tag_table_builder.builder import TagTable, build_tag_table, run
from tiff_tag_table_builder.render import MARKER, render_rust_table
from tiff_tag_table_builder.splice import splice_file

__version__ = "0.1.0"

__all__ = [
    "MARKER",
    "TagTable",
    "build_tag_table",
    "render_rust_table",
    "run",
    "splice_file",
]
