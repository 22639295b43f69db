"""Text normalization helpers for scraped transit backend payloads."""

import re
from datetime import date, datetime, time, timedelta
from urllib.parse import quote_plus

from ..core.exceptions import ParseError, UnknownEntityError

ENTITY_PATTERN = re.compile(r"&(?:#([xX][0-9a-fA-F]+|\d+)|([A-Za-z][A-Za-z0-9]*));")

NAMED_ENTITIES = {
    "amp": "&",
    "quot": '"',
    "apos": "'",
    "lt": "<",
    "gt": ">",
}

DATE_FORMATS = ("%d.%m.%y", "%d.%m.%Y", "%Y%m%d")
TIME_FORMATS = ("%H:%M", "%H:%M:%S")


def resolve_entities(text: str | None) -> str | None:
    """Decode numeric and the supported named character references.

    Args:
        text: Raw text as found in the page, or None

    Returns:
        Decoded text, or None if None was given

    Raises:
        UnknownEntityError: If a named entity outside the supported set occurs
        ParseError: If a numeric reference is not a valid code point
    """
    if text is None:
        return None

    def replace(match: re.Match[str]) -> str:
        code = match.group(1)
        if code is not None:
            try:
                if code[0] in "xX":
                    return chr(int(code[1:], 16))
                return chr(int(code))
            except (ValueError, OverflowError):
                raise ParseError(f"invalid character reference: {match.group(0)}") from None

        name = match.group(2)
        if name not in NAMED_ENTITIES:
            raise UnknownEntityError(name)
        return NAMED_ENTITIES[name]

    return ENTITY_PATTERN.sub(replace, text)


def parse_date(text: str) -> date:
    """Parse a backend date such as '01.05.12'."""
    value = text.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ParseError(f"cannot parse date: {text!r}")


def parse_time(text: str) -> time:
    """Parse a backend time such as '08:15'."""
    value = text.strip()
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(value, fmt).time()
        except ValueError:
            continue
    raise ParseError(f"cannot parse time: {text!r}")


def join_date_time(date_value: date | datetime, time_value: time | datetime) -> datetime:
    """Combine the calendar day of one value with the clock time of another.

    Year, month and day come only from ``date_value``; hour and minute come
    only from ``time_value``. Seconds and microseconds are never carried over.
    """
    return datetime(
        date_value.year,
        date_value.month,
        date_value.day,
        time_value.hour,
        time_value.minute,
    )


def add_days(value: datetime, days: int) -> datetime:
    """Shift a datetime by whole days."""
    return value + timedelta(days=days)


def url_encode(part: str, encoding: str = "utf-8") -> str:
    """Form-encode a query string value using the backend's charset.

    Characters the charset cannot represent are sent as '?'.
    """
    return quote_plus(part, safe="*", encoding=encoding, errors="replace")
