"""生成コードの書き込み（マーカー行以降の置換）.

マーカー行より前（手書き部分）はバイト単位でそのまま残し、マーカー行からファイル末尾までを
生成コードで置き換える。書き込みは同じディレクトリの一時ファイル経由で os.replace するので、
途中で失敗しても対象ファイルが半端な状態にはならない。
"""

from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

from loguru import logger

from tiff_tag_table_builder.core.exceptions import MarkerNotFoundError, TargetMissingError, TargetWriteError


def marker_pattern(marker: str) -> re.Pattern[str]:
    """行頭のマーカーからファイル末尾までにマッチするパターン."""
    return re.compile(rf"^{re.escape(marker)}.*", re.MULTILINE | re.DOTALL)


def splice_text(content: str, fragment: str, marker: str, path: Path) -> str:
    """content のマーカー行以降を fragment に置き換えた文字列を返す.

    Raises:
        MarkerNotFoundError: マーカー行が無い場合
    """
    match = marker_pattern(marker).search(content)
    if match is None:
        raise MarkerNotFoundError(path, marker)
    return content[: match.start()] + fragment


def atomic_write_text(path: Path, text: str) -> None:
    """一時ファイルに書いてから置き換える。失敗時は一時ファイルを削除する."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, path.stat().st_mode & 0o7777)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def splice_file(path: Path | str, fragment: str, marker: str) -> None:
    """対象ファイルのマーカー行以降を生成コードで置き換える.

    Args:
        path: 対象ファイル
        fragment: 生成コード片（マーカー行を含む）
        marker: マーカー文字列

    Raises:
        TargetMissingError: 対象ファイルが存在しない場合
        MarkerNotFoundError: マーカー行が無い場合
        TargetWriteError: 読み書きに失敗した場合（権限不足・容量不足・UTF-8 でない等）
    """
    path = Path(path)
    if not path.is_file():
        raise TargetMissingError(path)

    # newline="" で改行コードを変換せずに読む（手書き部分をそのまま残すため）
    try:
        with open(path, encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise TargetWriteError(path, str(e)) from e

    updated = splice_text(content, fragment, marker, path)
    try:
        atomic_write_text(path, updated)
    except OSError as e:
        raise TargetWriteError(path, str(e)) from e
    logger.info(f"Wrote generated code to {path}")
