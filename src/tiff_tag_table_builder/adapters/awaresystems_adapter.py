"""AwareSystemsTableAdapter for TIFF tag reference pages.

The tag pages share one layout: the tag list is a table nested in the
seventh cell of the fourth row of the page's top-level table.
"""

from __future__ import annotations

from collections.abc import Iterator

import lxml.etree as etree
import lxml.html
from loguru import logger

from tiff_tag_table_builder.core.exceptions import StructureError

from .base_adapter import BaseAdapter

LAYOUT_ROW = 4
LAYOUT_CELL = 7


def _table_rows(table: lxml.html.HtmlElement) -> list[lxml.html.HtmlElement]:
    # tbody may or may not be present in the markup
    return table.xpath("./tbody/tr") or table.xpath("./tr")


class AwareSystemsTableAdapter(BaseAdapter):
    """Adapter for one awaresystems.be tag table page.

    Args:
        html: Page HTML. Bytes are decoded by lxml from the page's own
            charset declaration; text is used as is.
        source: Source id used in logs and errors
    """

    def __init__(self, html: bytes | str, source: str) -> None:
        self.html = html
        self.source = source

    def _parse(self) -> lxml.html.HtmlElement:
        if isinstance(self.html, bytes):
            content, parser = self.html, None
        else:
            content, parser = self.html.encode("utf-8"), lxml.html.HTMLParser(encoding="utf-8")
        try:
            return lxml.html.document_fromstring(content, parser=parser)
        except etree.ParserError as e:
            raise StructureError(self.source, "document") from e

    def locate_table(self) -> lxml.html.HtmlElement:
        """Resolve body/table/tr[4]/td[7]/table.

        Raises:
            StructureError: Any step of the path is missing
        """
        document = self._parse()

        body = document.find("body")
        if body is None:
            raise StructureError(self.source, "body")

        outer_tables = body.xpath("./table")
        if not outer_tables:
            raise StructureError(self.source, "body/table")

        layout_rows = _table_rows(outer_tables[0])
        if len(layout_rows) < LAYOUT_ROW:
            raise StructureError(self.source, f"body/table/tr[{LAYOUT_ROW}]")

        cells = layout_rows[LAYOUT_ROW - 1].xpath("./td")
        if len(cells) < LAYOUT_CELL:
            raise StructureError(self.source, f"body/table/tr[{LAYOUT_ROW}]/td[{LAYOUT_CELL}]")

        nested = cells[LAYOUT_CELL - 1].xpath("./table")
        if not nested:
            raise StructureError(self.source, f"body/table/tr[{LAYOUT_ROW}]/td[{LAYOUT_CELL}]/table")

        return nested[0]

    def rows(self) -> Iterator[list[str]]:
        """Yield the cell texts of each tag row, skipping header-only rows."""
        table = self.locate_table()
        count = 0
        for tr in _table_rows(table):
            cells = tr.xpath("./td")
            if not cells:
                continue
            count += 1
            yield [td.text_content() for td in cells]
        logger.debug(f"Extracted {count} rows from {self.source}")
