"""Unit tests for source loading and page fetching."""

from pathlib import Path

import httpx
import pytest

from tiff_tag_table_builder.core.exceptions import NetworkError, SourceConfigError
from tiff_tag_table_builder.fetcher import (
    SOURCES_YML,
    SourceDescriptor,
    create_client,
    fetch_page,
    load_sources_config,
)

SOURCE = SourceDescriptor(id="baseline", location="https://tags.example/baseline.html")


class TestLoadSourcesConfig:
    def test_packaged_sources(self) -> None:
        """同梱の sources.yml は5ソースを決まった順で返す."""
        sources = load_sources_config(SOURCES_YML)

        assert [s.id for s in sources] == ["baseline", "extension", "private", "exif", "gps"]
        assert all(s.location.startswith("https://www.awaresystems.be/imaging/tiff/tifftags/") for s in sources)
        assert sources[3].location.endswith("privateifd/exif.html")

    def test_disabled_sources_skipped(self, tmp_path: Path) -> None:
        sources_yml = tmp_path / "sources.yml"
        sources_yml.write_text(
            "sources:\n"
            "  - id: a\n"
            "    url: https://tags.example/a.html\n"
            "  - id: b\n"
            "    url: https://tags.example/b.html\n"
            "    enabled: false\n",
            encoding="utf-8",
        )

        assert load_sources_config(sources_yml) == [SourceDescriptor(id="a", location="https://tags.example/a.html")]

    def test_empty_file(self, tmp_path: Path) -> None:
        sources_yml = tmp_path / "sources.yml"
        sources_yml.write_text("", encoding="utf-8")
        assert load_sources_config(sources_yml) == []

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """YAML として壊れていれば SourceConfigError."""
        sources_yml = tmp_path / "sources.yml"
        sources_yml.write_text("sources: [\n  - id: a\n", encoding="utf-8")

        with pytest.raises(SourceConfigError) as exc_info:
            load_sources_config(sources_yml)
        assert exc_info.value.stage == "config"
        assert exc_info.value.path == sources_yml

    def test_entry_without_url(self, tmp_path: Path) -> None:
        sources_yml = tmp_path / "sources.yml"
        sources_yml.write_text("sources:\n  - id: a\n", encoding="utf-8")

        with pytest.raises(SourceConfigError, match="KeyError"):
            load_sources_config(sources_yml)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceConfigError):
            load_sources_config(tmp_path / "nope.yml")


class TestFetchPage:
    def test_success(self, mock_client) -> None:
        client = mock_client({SOURCE.location: "<html>ok</html>"})
        assert fetch_page(SOURCE, client) == "<html>ok</html>"

    def test_without_header_charset_returns_bytes(self, mock_client) -> None:
        """ヘッダに charset が無ければデコードせずバイト列のまま返す."""
        body = "<html>Width in \u00b5m</html>".encode("latin-1")
        client = mock_client({SOURCE.location: body})

        assert fetch_page(SOURCE, client) == body

    def test_http_error_status(self, mock_client) -> None:
        client = mock_client({SOURCE.location: 503})
        with pytest.raises(NetworkError) as exc_info:
            fetch_page(SOURCE, client)
        assert exc_info.value.location == SOURCE.location
        assert exc_info.value.reason == "HTTP 503"

    def test_not_found(self, mock_client) -> None:
        client = mock_client({})
        with pytest.raises(NetworkError, match="HTTP 404"):
            fetch_page(SOURCE, client)

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(NetworkError, match="ConnectError"):
                fetch_page(SOURCE, client)

    def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(NetworkError, match="ReadTimeout"):
                fetch_page(SOURCE, client)


class TestCreateClient:
    def test_timeout_and_redirects(self) -> None:
        with create_client(timeout=5.0) as client:
            assert client.timeout.read == 5.0
            assert client.follow_redirects is True
