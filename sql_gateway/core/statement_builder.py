"""Statement Builder: one parameterized SQL statement per gateway operation.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Table names reach SQL text only after validate_table_name
    - Values (ids, record values, limit/offset, hidden prefixes) are always bound as `?`
    - Column order follows the Record's key order; bind order matches placeholder order
    - Column names are interpolated as given: the database rejects unknown columns

Design Decisions:
    - qmark placeholders: statements are handed to the driver unchanged
      (exec_driver_sql), the same way raw queries are
    - Builders re-validate their table argument so a bare str can never slip through
"""

from sql_gateway.core.domain_types import Record, Scalar, Statement
from sql_gateway.core.errors import MissingBodyError, MissingQueryError
from sql_gateway.core.identifiers import validate_table_name

DEFAULT_HIDDEN_PREFIXES: tuple[str, ...] = ("sqlite_", "_cf_")


def escape_like(text: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so text matches literally."""
    return (
        text.replace(escape, escape * 2)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )


def build_list_tables(
    hidden_prefixes: tuple[str, ...] | list[str] = DEFAULT_HIDDEN_PREFIXES,
) -> Statement:
    """List user tables from the schema catalog, hiding internal prefixes."""
    sql = "SELECT name FROM sqlite_master WHERE type = 'table'"
    params: list[Scalar] = []
    for prefix in hidden_prefixes:
        sql += " AND name NOT LIKE ? ESCAPE '\\'"
        params.append(escape_like(prefix) + "%")
    sql += " ORDER BY name"
    return Statement(sql, tuple(params))


def build_list_records(table: str, limit: int, offset: int) -> Statement:
    name = validate_table_name(table)
    return Statement(f"SELECT * FROM {name} LIMIT ? OFFSET ?", (limit, offset))


def build_get_record(table: str, record_id: str) -> Statement:
    name = validate_table_name(table)
    return Statement(f"SELECT * FROM {name} WHERE id = ?", (record_id,))


def build_insert_record(table: str, record: Record | None) -> Statement:
    """INSERT one row; columns and values follow the record's key order."""
    name = validate_table_name(table)
    record = _require_record(record)
    columns = ", ".join(record)
    placeholders = ", ".join("?" for _ in record)
    return Statement(
        f"INSERT INTO {name} ({columns}) VALUES ({placeholders})",
        tuple(record.values()),
    )


def build_update_record(
    table: str, record_id: str, record: Record | None,
) -> Statement:
    """UPDATE one row by id; SET values first, then the id."""
    name = validate_table_name(table)
    record = _require_record(record)
    assignments = ", ".join(f"{column} = ?" for column in record)
    return Statement(
        f"UPDATE {name} SET {assignments} WHERE id = ?",
        (*record.values(), record_id),
    )


def build_delete_record(table: str, record_id: str) -> Statement:
    name = validate_table_name(table)
    return Statement(f"DELETE FROM {name} WHERE id = ?", (record_id,))


def build_raw_query(
    query: str | None, params: list[Scalar] | None = None,
) -> Statement:
    """Pass caller SQL through verbatim. No identifier checks: auth is the only gate."""
    if not query or not query.strip():
        raise MissingQueryError()
    return Statement(query, tuple(params or ()))


def _require_record(record: Record | None) -> Record:
    if not record:
        raise MissingBodyError()
    return record
