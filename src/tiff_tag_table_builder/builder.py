"""タグテーブルビルダー（オーケストレーター）.

ソースページを登録順に取得・解析して1つのタグレジストリへ統合し、Rust の静的テーブルとして
対象ファイルへ書き込む。どの段階で失敗しても対象ファイルには触れない
（書き込みは生成コードが揃ってから最後に1回だけ行う）。
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import httpx
from loguru import logger

from tiff_tag_table_builder.adapters.awaresystems_adapter import AwareSystemsTableAdapter
from tiff_tag_table_builder.core.exceptions import TagTableError
from tiff_tag_table_builder.core.records import TagRecord
from tiff_tag_table_builder.core.registry import TagRegistry, accumulate, finalize
from tiff_tag_table_builder.core.report import export_tag_reports
from tiff_tag_table_builder.fetcher import (
    DEFAULT_TIMEOUT,
    SourceDescriptor,
    create_client,
    fetch_page,
    load_sources_config,
)
from tiff_tag_table_builder.render import MARKER, render_rust_table
from tiff_tag_table_builder.splice import splice_file

DEFAULT_OUTPUT = Path("src") / "arw_file" / "ifd" / "tag.rs"


@dataclass(frozen=True)
class TagTable:
    """統合結果.

    Attributes:
        tags: ifd 確定済み・ID昇順のタグ辞書
        registry: 統合時の記録（ソース・重複）
    """

    tags: dict[int, TagRecord]
    registry: TagRegistry


def build_tag_table(sources: Sequence[SourceDescriptor], client: httpx.Client) -> TagTable:
    """全ソースを順番に取得・解析・統合する.

    Raises:
        NetworkError / StructureError / ParseError / ConflictError
    """
    registry = TagRegistry()
    for source in sources:
        html = fetch_page(source, client)
        adapter = AwareSystemsTableAdapter(html, source.id)
        registry = accumulate(registry, adapter.read(), source.id)

    tags = finalize(registry)
    ifd_count = sum(1 for t in tags.values() if t.ifd)
    logger.info(f"Collected {len(tags)} tags ({ifd_count} IFD pointers) from {len(sources)} sources")
    return TagTable(tags=tags, registry=registry)


def run(
    output_path: Path,
    sources: Sequence[SourceDescriptor] | None = None,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    report_dir: Path | None = None,
    dry_run: bool = False,
    generated_at: datetime | None = None,
) -> str:
    """取得から書き込みまでを一通り実行し、生成コード片を返す.

    Args:
        output_path: 書き込み先（マーカー行を含む既存ファイル）
        sources: 取得対象（省略時は sources.yml）
        client: HTTP クライアント（省略時は timeout 付きで作成して閉じる）
        timeout: client を作成する場合のリクエストタイムアウト（秒）
        report_dir: 指定時は CSV レポートを出力
        dry_run: True なら対象ファイルを書き換えない
        generated_at: 生成日時コメントに使う時刻

    Raises:
        TagTableError: いずれかの段階で失敗した場合
    """
    if sources is None:
        sources = load_sources_config()

    if client is None:
        with create_client(timeout) as own_client:
            table = build_tag_table(sources, own_client)
    else:
        table = build_tag_table(sources, client)

    fragment = render_rust_table(table.tags, generated_at=generated_at)

    if report_dir is not None:
        paths = export_tag_reports(table.tags, table.registry, report_dir)
        logger.info(f"Reports written: {', '.join(str(p) for p in paths.values() if p)}")

    if dry_run:
        logger.info(f"Dry run: {output_path} not modified")
    else:
        splice_file(output_path, fragment, MARKER)
    return fragment


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI エントリポイント."""
    parser = argparse.ArgumentParser(description="Regenerate the TIFF tag table from the published tag pages")
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="source file containing the generated-code marker (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="per-request timeout in seconds (default: %(default)s)",
    )
    parser.add_argument("--report-dir", type=Path, default=None, help="write tags.csv/duplicates.csv here")
    parser.add_argument("--dry-run", action="store_true", help="print generated code instead of writing it")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    try:
        fragment = run(
            output_path=args.output,
            timeout=args.timeout,
            report_dir=args.report_dir,
            dry_run=args.dry_run,
        )
    except TagTableError as e:
        logger.error(f"[{e.stage}] {e}")
        return 1

    if args.dry_run:
        sys.stdout.write(fragment)
    return 0


if __name__ == "__main__":
    sys.exit(main())
