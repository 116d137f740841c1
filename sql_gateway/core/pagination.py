"""Pagination: permissive parsing of the `limit` / `offset` query parameters.

Invariants:
    - Never raises: unparseable input falls back to the default
    - Leading-integer semantics: "10abc" -> 10, " 5 " -> 5, "-1" -> -1, "abc" -> default
"""

import re

DEFAULT_LIMIT = 100
DEFAULT_OFFSET = 0

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)


def parse_int_param(raw: str | None, default: int) -> int:
    """Parse the leading integer of raw, or return default."""
    if not raw:
        return default
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    return int(match.group(1))


def parse_page(limit: str | None, offset: str | None) -> tuple[int, int]:
    """Resolve (limit, offset) from raw query-string values."""
    return (
        parse_int_param(limit, DEFAULT_LIMIT),
        parse_int_param(offset, DEFAULT_OFFSET),
    )
