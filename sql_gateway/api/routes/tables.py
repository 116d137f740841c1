"""Table Routes: generic CRUD over any allow-listed table.

Invariants:
    - Every route requires the API key (router-level dependency, resolved first)
    - {table} passes validate_table_name before the service builds any SQL
    - {id} is forwarded as the raw path string: the database decides coercion
    - Routes never contain SQL: they delegate to TableService

Design Decisions:
    - limit/offset read as raw strings: unparseable values fall back to defaults
      instead of failing validation
    - Bodies come from json_body, not Body(): the Content-Type header is not consulted
"""

from fastapi import APIRouter, Depends, Query, status

from sql_gateway.api.dependencies import (
    GatewayContext,
    get_context,
    get_table_service,
    json_body,
    require_api_key,
    valid_table,
)
from sql_gateway.api.responses import envelope_response
from sql_gateway.core.domain_types import TableName
from sql_gateway.core.pagination import parse_page
from sql_gateway.schemas.requests import RecordBody
from sql_gateway.services.table_service import TableService

router = APIRouter(
    prefix="/tables", tags=["tables"],
    dependencies=[Depends(require_api_key)],
)


@router.get("")
async def list_tables(
    context: GatewayContext = Depends(get_context),
    service: TableService = Depends(get_table_service),
):
    """List user tables."""
    return envelope_response(await service.list_tables(), context.settings)


@router.get("/{table}")
async def list_records(
    table: TableName = Depends(valid_table),
    limit: str | None = Query(None),
    offset: str | None = Query(None),
    context: GatewayContext = Depends(get_context),
    service: TableService = Depends(get_table_service),
):
    """Page through a table (limit defaults to 100, offset to 0)."""
    page_limit, page_offset = parse_page(limit, offset)
    envelope = await service.list_records(table, page_limit, page_offset)
    return envelope_response(envelope, context.settings)


@router.get("/{table}/{record_id}")
async def get_record(
    record_id: str,
    table: TableName = Depends(valid_table),
    context: GatewayContext = Depends(get_context),
    service: TableService = Depends(get_table_service),
):
    """Fetch one record by id."""
    envelope = await service.get_record(table, record_id)
    return envelope_response(envelope, context.settings)


@router.post("/{table}")
async def create_record(
    table: TableName = Depends(valid_table),
    body: RecordBody | None = Depends(json_body(RecordBody)),
    context: GatewayContext = Depends(get_context),
    service: TableService = Depends(get_table_service),
):
    """Insert one record; columns come from the body's keys."""
    envelope = await service.create_record(table, body)
    return envelope_response(
        envelope, context.settings, status.HTTP_201_CREATED,
    )


@router.put("/{table}/{record_id}")
async def update_record(
    record_id: str,
    table: TableName = Depends(valid_table),
    body: RecordBody | None = Depends(json_body(RecordBody)),
    context: GatewayContext = Depends(get_context),
    service: TableService = Depends(get_table_service),
):
    """Update one record by id with the body's columns."""
    envelope = await service.update_record(table, record_id, body)
    return envelope_response(envelope, context.settings)


@router.delete("/{table}/{record_id}")
async def delete_record(
    record_id: str,
    table: TableName = Depends(valid_table),
    context: GatewayContext = Depends(get_context),
    service: TableService = Depends(get_table_service),
):
    """Delete one record by id."""
    envelope = await service.delete_record(table, record_id)
    return envelope_response(envelope, context.settings)
