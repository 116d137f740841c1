"""Identifier Validation: the allow-list guarding table names before interpolation.

Invariants:
    - Accepts iff non-empty, ASCII letters/digits/underscore only, first char not a digit
    - validate_table_name is the only way to obtain a TableName
    - Never applied to values: values are always bound parameters

Design Decisions:
    - fullmatch with re.ASCII: `\\w`-style shortcuts would admit Unicode letters and
      `$` would admit a trailing newline, so the character classes are spelled out
"""

import re

from sql_gateway.core.domain_types import TableName
from sql_gateway.core.errors import InvalidTableNameError

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*", re.ASCII)


def is_valid_identifier(name: str) -> bool:
    """True when name is safe to interpolate as a SQL identifier."""
    return isinstance(name, str) and _IDENTIFIER.fullmatch(name) is not None


def validate_table_name(name: str) -> TableName:
    """Return name as a TableName or raise InvalidTableNameError."""
    if not is_valid_identifier(name):
        raise InvalidTableNameError(name)
    return TableName(name)
