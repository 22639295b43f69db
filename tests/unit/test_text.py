"""Unit tests for text normalization helpers."""

from datetime import date, datetime, time

import pytest

from transit_enabler.core.exceptions import ParseError, UnknownEntityError
from transit_enabler.utils.text import (
    add_days,
    join_date_time,
    parse_date,
    parse_time,
    resolve_entities,
    url_encode,
)


class TestResolveEntities:
    """Test entity decoding."""

    def test_none_passes_through(self):
        assert resolve_entities(None) is None

    def test_plain_text_unchanged(self):
        assert resolve_entities("Frankfurt(Main)Hbf") == "Frankfurt(Main)Hbf"

    def test_named_entities(self):
        """Test the supported named entities."""
        assert resolve_entities("A &amp; B") == "A & B"
        assert resolve_entities("&quot;x&quot;") == '"x"'
        assert resolve_entities("it&apos;s") == "it's"
        assert resolve_entities("&lt;b&gt;") == "<b>"

    def test_numeric_entities(self):
        """Test decimal and hexadecimal references."""
        assert resolve_entities("M&#252;nchen") == "München"
        assert resolve_entities("M&#xFC;nchen") == "München"
        assert resolve_entities("Gie&#223;en") == "Gießen"

    def test_unknown_entity_raises(self):
        with pytest.raises(UnknownEntityError, match="unknown entity: nbsp") as exc_info:
            resolve_entities("Frankfurt&nbsp;Hbf")
        assert exc_info.value.entity == "nbsp"

    def test_unknown_entity_is_parse_error(self):
        with pytest.raises(ParseError):
            resolve_entities("&bogus;")

    def test_out_of_range_reference(self):
        """Test that references beyond the code point range are parse failures."""
        for text in ("A&#1114112;", "A&#x110000;", "A&#99999999999999999999999;"):
            with pytest.raises(ParseError, match="invalid character reference"):
                resolve_entities(text)

    def test_ampersand_without_reference_kept(self):
        assert resolve_entities("Galluswarte & Messe") == "Galluswarte & Messe"


class TestDateTime:
    """Test date and time parsing and arithmetic."""

    def test_parse_date_formats(self):
        assert parse_date("01.05.12") == date(2012, 5, 1)
        assert parse_date("01.05.2012") == date(2012, 5, 1)
        assert parse_date("20120501") == date(2012, 5, 1)
        assert parse_date(" 01.05.12 ") == date(2012, 5, 1)

    def test_parse_date_invalid(self):
        with pytest.raises(ParseError, match="cannot parse date"):
            parse_date("31.02.12")

    def test_parse_time_formats(self):
        assert parse_time("08:15") == time(8, 15)
        assert parse_time("23:59:30") == time(23, 59, 30)

    def test_parse_time_invalid(self):
        with pytest.raises(ParseError, match="cannot parse time"):
            parse_time("25:00")

    def test_join_date_time(self):
        """Test that only the day of one and the clock of the other are used."""
        result = join_date_time(datetime(2012, 5, 1, 13, 45, 10), datetime(1999, 1, 1, 8, 15, 59))
        assert result == datetime(2012, 5, 1, 8, 15)
        assert result.second == 0
        assert result.microsecond == 0

    def test_join_date_time_with_plain_values(self):
        assert join_date_time(date(2012, 5, 1), time(23, 55)) == datetime(2012, 5, 1, 23, 55)

    def test_add_days(self):
        assert add_days(datetime(2012, 5, 1, 23, 55), 1) == datetime(2012, 5, 2, 23, 55)
        assert add_days(datetime(2012, 3, 1, 0, 5), -1) == datetime(2012, 2, 29, 0, 5)


class TestUrlEncode:
    """Test query value encoding."""

    def test_utf8(self):
        assert url_encode("Wächtersbach") == "W%C3%A4chtersbach"

    def test_latin1(self):
        assert url_encode("Wächtersbach", "ISO-8859-1") == "W%E4chtersbach"

    def test_unencodable_characters_replaced(self):
        assert url_encode("Łódź", "ISO-8859-1") == "%3F%F3d%3F"
        assert url_encode("Łódź") == "%C5%81%C3%B3d%C5%BA"

    def test_space_and_reserved(self):
        assert url_encode("A=1@L=3000001@") == "A%3D1%40L%3D3000001%40"
        assert url_encode("Frankfurt Hbf") == "Frankfurt+Hbf"
        assert url_encode("a*b") == "a*b"
