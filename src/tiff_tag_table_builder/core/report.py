"""収集結果のレポート出力.

取得したタグ一覧と重複（同一定義の再登録）を CSV として出力します。
メンテナンス実行ごとの差分確認に使う。
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import polars as pl

from tiff_tag_table_builder.core.exceptions import ReportError
from tiff_tag_table_builder.core.records import TagRecord
from tiff_tag_table_builder.core.registry import TagRegistry


def tags_frame(tags: Mapping[int, TagRecord], origins: Mapping[int, str]) -> pl.DataFrame:
    """確定済みタグを DataFrame に変換する（ID昇順）."""
    ids = sorted(tags)
    return pl.DataFrame(
        {
            "id": ids,
            "hex": [tags[i].hex_id for i in ids],
            "label": [tags[i].label for i in ids],
            "description": [tags[i].description for i in ids],
            "ifd": [bool(tags[i].ifd) for i in ids],
            "source": [origins.get(i, "") for i in ids],
        },
        schema={
            "id": pl.Int64,
            "hex": pl.String,
            "label": pl.String,
            "description": pl.String,
            "ifd": pl.Boolean,
            "source": pl.String,
        },
    )


def export_tag_reports(
    tags: Mapping[int, TagRecord],
    registry: TagRegistry,
    output_dir: Path | str,
) -> dict[str, Path | None]:
    """タグ一覧と重複レポートを CSV ファイルとして出力する.

    Args:
        tags: finalize() 済みのタグ辞書
        registry: 統合結果（ソース情報・重複情報の取得元）
        output_dir: 出力ディレクトリ

    Returns:
        出力したCSVのパス（重複が無ければ "duplicates" は None）
        - "tags": tags.csv
        - "duplicates": duplicates.csv

    Raises:
        ReportError: 出力先を作成・書き込みできない場合
    """
    output_dir = Path(output_dir)
    try:
        return _write_reports(tags, registry, output_dir)
    except (OSError, pl.exceptions.PolarsError) as e:
        raise ReportError(output_dir, str(e)) from e


def _write_reports(tags: Mapping[int, TagRecord], registry: TagRegistry, output_dir: Path) -> dict[str, Path | None]:
    output_dir.mkdir(parents=True, exist_ok=True)

    result_paths: dict[str, Path | None] = {}

    tags_path = output_dir / "tags.csv"
    tags_frame(tags, registry.origins).write_csv(tags_path)
    result_paths["tags"] = tags_path

    duplicates_path = output_dir / "duplicates.csv"
    if registry.duplicates:
        pl.DataFrame(
            {
                "tag_id": [d.tag_id for d in registry.duplicates],
                "first_source": [d.first_source for d in registry.duplicates],
                "source": [d.source for d in registry.duplicates],
            }
        ).write_csv(duplicates_path)
        result_paths["duplicates"] = duplicates_path
    else:
        result_paths["duplicates"] = None

    return result_paths
