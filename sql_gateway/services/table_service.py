"""Table Service: build one statement, execute it, shape the envelope.

Invariants:
    - Exactly one gateway call per operation; validation errors raise before it
    - Zero rows (get) or zero affected rows (update/delete) raise RecordNotFoundError
    - Returns success envelopes only; every failure is a GatewayError

Design Decisions:
    - Update with zero affected rows is reported as not found, even when the row
      exists and the engine counted the write as a no-op (ADR: documented contract)
    - Envelope keys mirror the public API (lastRowId, changes), not engine field names
"""

import logging
from typing import Protocol

from sql_gateway.core.domain_types import ExecutionResult, Record, Scalar, Statement
from sql_gateway.core.envelope import success
from sql_gateway.core.errors import RecordNotFoundError
from sql_gateway.core.statement_builder import (
    DEFAULT_HIDDEN_PREFIXES,
    build_delete_record,
    build_get_record,
    build_insert_record,
    build_list_records,
    build_list_tables,
    build_raw_query,
    build_update_record,
)

logger = logging.getLogger(__name__)


class StatementExecutor(Protocol):
    """Contract for the database gateway, implemented by infrastructure."""
    async def execute(self, statement: Statement) -> ExecutionResult: ...


class TableService:
    """Generic CRUD + raw query over any allow-listed table."""

    def __init__(
        self,
        database: StatementExecutor,
        hidden_prefixes: tuple[str, ...] | list[str] = DEFAULT_HIDDEN_PREFIXES,
    ):
        self.database = database
        self.hidden_prefixes = tuple(hidden_prefixes)

    async def list_tables(self) -> dict:
        result = await self.database.execute(
            build_list_tables(self.hidden_prefixes),
        )
        return success(result.rows)

    async def list_records(self, table: str, limit: int, offset: int) -> dict:
        result = await self.database.execute(
            build_list_records(table, limit, offset),
        )
        return success(result.rows, meta=result.meta.to_dict())

    async def get_record(self, table: str, record_id: str) -> dict:
        result = await self.database.execute(build_get_record(table, record_id))
        row = result.first()
        if row is None:
            raise RecordNotFoundError(table, record_id)
        return success(row)

    async def create_record(self, table: str, record: Record | None) -> dict:
        result = await self.database.execute(build_insert_record(table, record))
        logger.info(
            f"Inserted into {table}",
            extra={"table": table, "rows": result.meta.changes},
        )
        return success({
            "lastRowId": result.meta.last_row_id,
            "changes": result.meta.changes,
        })

    async def update_record(
        self, table: str, record_id: str, record: Record | None,
    ) -> dict:
        result = await self.database.execute(
            build_update_record(table, record_id, record),
        )
        if result.meta.changes == 0:
            raise RecordNotFoundError(table, record_id)
        logger.info(
            f"Updated {table}",
            extra={"table": table, "rows": result.meta.changes},
        )
        return success({"changes": result.meta.changes})

    async def delete_record(self, table: str, record_id: str) -> dict:
        result = await self.database.execute(build_delete_record(table, record_id))
        if result.meta.changes == 0:
            raise RecordNotFoundError(table, record_id)
        logger.info(
            f"Deleted from {table}",
            extra={"table": table, "rows": result.meta.changes},
        )
        return success({"changes": result.meta.changes})

    async def run_query(
        self, query: str | None, params: list[Scalar] | None = None,
    ) -> dict:
        result = await self.database.execute(build_raw_query(query, params))
        return success(result.rows, meta=result.meta.to_dict())
