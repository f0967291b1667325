"""共通フィクスチャ（タグページHTMLとモックHTTPクライアント）."""

from __future__ import annotations

import html
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence

import httpx
import pytest

from tiff_tag_table_builder.fetcher import SourceDescriptor


def build_tag_page(rows: Iterable[Sequence[str]], tbody: bool = True, charset: str | None = None) -> str:
    """awaresystems.be と同じレイアウト（table/tr[4]/td[7]/table）のページを作る.

    charset を指定すると meta http-equiv で文字コードを宣言する。
    """

    def wrap(inner: str) -> str:
        return f"<tbody>{inner}</tbody>" if tbody else inner

    header = "<tr><th>Code</th><th>Hex</th><th>Name</th><th>Description</th></tr>"
    tag_rows = "".join(
        "<tr>" + "".join(f"<td>{html.escape(cell)}</td>" for cell in row) + "</tr>" for row in rows
    )
    layout_rows = "".join(f"<tr><td>layout {i}</td></tr>" for i in range(1, 4))
    filler_cells = "".join("<td>&nbsp;</td>" for _ in range(6))
    nested = f"<table>{wrap(header + tag_rows)}</table>"
    meta = f'<meta http-equiv="Content-Type" content="text/html; charset={charset}">' if charset else ""
    return (
        f"<!DOCTYPE html><html><head>{meta}<title>TIFF Tags</title></head><body>"
        f"<table>{wrap(layout_rows + f'<tr>{filler_cells}<td>{nested}</td></tr>')}</table>"
        "</body></html>"
    )


def make_sources(*ids: str) -> list[SourceDescriptor]:
    return [SourceDescriptor(id=i, location=f"https://tags.example/{i}.html") for i in ids]


@pytest.fixture
def tag_page() -> Callable[..., str]:
    return build_tag_page


@pytest.fixture
def mock_client() -> Iterator[Callable[[Mapping[str, bytes | str | int]], httpx.Client]]:
    """URL → HTML（または HTTP ステータス）の辞書から httpx.Client を作る.

    bytes のページは Content-Type に charset を付けずに返す。
    """
    clients: list[httpx.Client] = []

    def factory(pages: Mapping[str, bytes | str | int]) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            page = pages.get(str(request.url))
            if page is None:
                return httpx.Response(404, text="not found")
            if isinstance(page, int):
                return httpx.Response(page, text="error")
            if isinstance(page, bytes):
                return httpx.Response(200, content=page, headers={"Content-Type": "text/html"})
            return httpx.Response(200, text=page, headers={"Content-Type": "text/html; charset=utf-8"})

        client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def sources() -> Callable[..., list[SourceDescriptor]]:
    return make_sources
