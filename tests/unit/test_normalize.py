"""Unit tests for row normalization."""

import pytest

from tiff_tag_table_builder.core.exceptions import ParseError
from tiff_tag_table_builder.core.normalize import normalize_row, normalize_text, parse_tag_id
from tiff_tag_table_builder.core.records import TagRecord


class TestNormalizeText:
    def test_collapse_whitespace(self) -> None:
        assert normalize_text("Image\n   Width") == "Image Width"
        assert normalize_text("\tNew\r\nSubfileType ") == "New SubfileType"

    def test_non_breaking_space(self) -> None:
        assert normalize_text("GPS\xa0Info") == "GPS Info"

    def test_keeps_punctuation(self) -> None:
        assert normalize_text('The "name" of (the) scanner.') == 'The "name" of (the) scanner.'


class TestParseTagId:
    def test_decimal(self) -> None:
        assert parse_tag_id("256", "baseline") == 256
        assert parse_tag_id(" 34665 ", "exif") == 34665

    def test_bounds(self) -> None:
        assert parse_tag_id("0", "gps") == 0
        assert parse_tag_id("65535", "private") == 65535

    def test_out_of_range(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_tag_id("65536", "private")
        assert exc_info.value.source == "private"
        assert exc_info.value.value == "65536"

    @pytest.mark.parametrize("text", ["", "Code", "0x0100", "-1", "12a", "١٢"])
    def test_not_a_number(self, text: str) -> None:
        with pytest.raises(ParseError):
            parse_tag_id(text, "baseline")


class TestNormalizeRow:
    def test_xmp_row(self) -> None:
        """("700", "0x02BC", "XMP", "XMP metadata") → id 700."""
        record = normalize_row(["700", "0x02BC", "XMP", "XMP metadata"], "extension")
        assert record == TagRecord(id=700, label="XMP", description="XMP metadata")
        assert record.ifd is None

    def test_hex_column_ignored(self) -> None:
        record = normalize_row(["256", "not-hex", "ImageWidth", "The number of columns."])
        assert record.id == 256
        assert record.hex_id == "0x0100"

    def test_extra_columns_ignored(self) -> None:
        record = normalize_row(["256", "0x0100", "ImageWidth", "Columns.", "Baseline"])
        assert record.description == "Columns."

    def test_whitespace_normalized(self) -> None:
        record = normalize_row(["  259 ", "0x0103", " Compression\n", "Compression\n  scheme used."])
        assert record.label == "Compression"
        assert record.description == "Compression scheme used."

    def test_too_few_columns(self) -> None:
        with pytest.raises(ParseError, match="expected 4 columns"):
            normalize_row(["256", "0x0100", "ImageWidth"], "baseline")

    def test_bad_id(self) -> None:
        with pytest.raises(ParseError, match="baseline"):
            normalize_row(["abc", "0x0100", "ImageWidth", "Columns."], "baseline")
