"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - TableName only ever holds a string that passed the identifier allow-list
    - Scalar is the closed set of values a Record may bind: null, bool, int, float, str
    - Statement is immutable: SQL text with `?` placeholders plus its bind values

Design Decisions:
    - NewType over a wrapper class: zero runtime cost, full type-checker support
    - Record keeps insertion order (dict): column order in INSERT/UPDATE follows the body
"""

from dataclasses import dataclass, field
from typing import Any, NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

TableName = NewType("TableName", str)


# ─── Value Types ─────────────────────────────────────────────────

Scalar = Union[None, bool, int, float, str]
Record = dict[str, Scalar]


# ─── Statements & Results ────────────────────────────────────────

@dataclass(frozen=True)
class Statement:
    """One parameterized SQL statement ready for the database gateway."""
    sql: str
    params: tuple[Scalar, ...] = ()


@dataclass(frozen=True)
class ExecutionMeta:
    """Engine metadata reported alongside every execution."""
    last_row_id: int | None = None
    changes: int = 0
    duration: float = 0.0
    rows_read: int = 0
    rows_written: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "last_row_id": self.last_row_id,
            "changes": self.changes,
            "duration": self.duration,
            "rows_read": self.rows_read,
            "rows_written": self.rows_written,
        }


@dataclass(frozen=True)
class ExecutionResult:
    """Rows (as plain dicts) plus metadata for one executed statement."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    meta: ExecutionMeta = field(default_factory=ExecutionMeta)

    def first(self) -> dict[str, Any] | None:
        return self.rows[0] if self.rows else None
