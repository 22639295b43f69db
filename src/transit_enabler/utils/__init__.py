"""Utility modules for transit-enabler."""

from .text import (
    add_days,
    join_date_time,
    parse_date,
    parse_time,
    resolve_entities,
    url_encode,
)

__all__ = [
    "add_days",
    "join_date_time",
    "parse_date",
    "parse_time",
    "resolve_entities",
    "url_encode",
]
