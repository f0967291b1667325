"""ソースページの定義読み込みと取得."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import httpx
import yaml
from loguru import logger

from tiff_tag_table_builder.core.exceptions import NetworkError, SourceConfigError

SOURCES_YML = Path(__file__).parent / "sources.yml"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = "tiff-tag-table-builder"


@dataclass(frozen=True)
class SourceDescriptor:
    """取得対象の1ページ."""

    id: str
    location: str


def load_sources_config(sources_yml: Path = SOURCES_YML) -> list[SourceDescriptor]:
    """sources.ymlを読み込んで有効なソースを定義順に返す.

    Args:
        sources_yml: sources.ymlファイルのパス

    Returns:
        有効なソースのリスト（順序は処理順）

    Raises:
        SourceConfigError: 読み込めない、YAML として不正、または id/url が欠けている場合
    """
    try:
        with open(sources_yml, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise SourceConfigError(sources_yml, str(e)) from e

    try:
        sources = config.get("sources", [])
        # enabled=false のものは除外
        enabled_sources = [
            SourceDescriptor(id=s["id"], location=s["url"]) for s in sources if s.get("enabled", True)
        ]
    except (AttributeError, KeyError, TypeError) as e:
        raise SourceConfigError(sources_yml, f"malformed source entry ({type(e).__name__}: {e})") from e

    logger.info(f"Loaded {len(enabled_sources)} enabled sources from {sources_yml}")
    return enabled_sources


def create_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.Client:
    """ソース取得用の HTTP クライアントを作成する（リダイレクト追従・タイムアウト付き）."""
    return httpx.Client(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


def fetch_page(source: SourceDescriptor, client: httpx.Client) -> bytes | str:
    """1ページ分のHTMLを取得する.

    Args:
        source: 取得対象
        client: HTTP クライアント（タイムアウトはクライアント側の設定を使う）

    Returns:
        Content-Type ヘッダで charset が指定されていればデコード済みの本文、
        無ければ生のバイト列（文字コードはページ内の meta 宣言から lxml が判定する）

    Raises:
        NetworkError: 通信エラー・タイムアウト・2xx 以外のステータス
    """
    logger.info(f"Fetching {source.id} from {source.location}")
    try:
        response = client.get(source.location)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise NetworkError(source.location, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise NetworkError(source.location, f"{type(e).__name__}: {e}") from e

    logger.debug(f"Fetched {len(response.content)} bytes from {source.location}")
    if response.charset_encoding is None:
        return response.content
    return response.text
