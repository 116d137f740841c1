"""Database Gateway: executes one parameterized statement per call on an async engine.

Invariants:
    - One connection + one transaction per execute(); committed on success, rolled back on error
    - Statements reach the driver unchanged (exec_driver_sql, qmark placeholders)
    - Results are fully buffered before the connection returns to the pool
    - All SQLAlchemy exceptions mapped to ExecutionError carrying the engine's message,
      as are driver OverflowErrors on out-of-range integer binds
    - changes reflects the driver's rowcount even when rows come back (INSERT ... RETURNING)

Design Decisions:
    - Engine owns pooling (pool_pre_ping for stale connections); the gateway adds none
    - DB-API message (exc.orig) over str(exc): SQLAlchemy's text appends the SQL echo
      and a documentation link, neither of which belongs in a client response
"""

import logging
import time
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from sql_gateway.core.domain_types import ExecutionMeta, ExecutionResult, Statement
from sql_gateway.core.errors import ExecutionError

logger = logging.getLogger(__name__)


class DatabaseGateway:
    """Thin adapter between built statements and the database binding."""

    def __init__(self, database_url: str, engine: AsyncEngine | None = None):
        self.engine = engine or create_async_engine(
            database_url, pool_pre_ping=True,
        )

    async def execute(self, statement: Statement) -> ExecutionResult:
        """Run statement, returning rows + metadata or raising ExecutionError."""
        logger.debug(
            f"Executing: {statement.sql}",
            extra={"param_count": len(statement.params)},
        )
        started = time.perf_counter()
        try:
            async with self.engine.begin() as conn:
                result = await conn.exec_driver_sql(
                    statement.sql, statement.params,
                )
                last_row_id = _last_row_id(result)
                # -1 when the driver has no count (plain SELECT)
                changes = max(result.rowcount, 0)
                rows = (
                    [dict(row) for row in result.mappings().all()]
                    if result.returns_rows else []
                )
        except DBAPIError as e:
            message = str(e.orig) if e.orig is not None else str(e)
            logger.error(
                f"DB driver error: {message}",
                extra={"error_code": "EXECUTION_ERROR"},
            )
            raise ExecutionError(message)
        except SQLAlchemyError as e:
            logger.error(
                f"SQLAlchemy error: {e}",
                extra={"error_code": "EXECUTION_ERROR"},
            )
            raise ExecutionError(str(e))
        except OverflowError as e:
            # Raised by the driver while binding, before SQLAlchemy can wrap it
            logger.error(
                f"Parameter out of range: {e}",
                extra={"error_code": "EXECUTION_ERROR"},
            )
            raise ExecutionError(str(e))

        duration_ms = (time.perf_counter() - started) * 1000
        meta = ExecutionMeta(
            last_row_id=last_row_id,
            changes=changes,
            duration=round(duration_ms, 3),
            rows_read=len(rows),
            rows_written=changes,
        )
        logger.debug(
            "Statement complete",
            extra={"duration_ms": meta.duration, "rows": len(rows)},
        )
        return ExecutionResult(rows=rows, meta=meta)

    async def health_check(self) -> bool:
        """Check database connectivity."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


def _last_row_id(result: Any) -> int | None:
    try:
        return result.lastrowid
    except (AttributeError, SQLAlchemyError):
        return None
