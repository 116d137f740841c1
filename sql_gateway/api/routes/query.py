"""Raw Query Route: trusted SQL escape hatch for authenticated callers.

Invariants:
    - Requires the API key; no identifier validation, no statement-shape restriction
    - SQL text is executed verbatim with the caller's bind parameters
"""

from fastapi import APIRouter, Depends

from sql_gateway.api.dependencies import (
    GatewayContext,
    get_context,
    get_table_service,
    json_body,
    require_api_key,
)
from sql_gateway.api.responses import envelope_response
from sql_gateway.schemas.requests import QueryRequest
from sql_gateway.services.table_service import TableService

router = APIRouter(tags=["query"], dependencies=[Depends(require_api_key)])


@router.post("/query")
async def run_query(
    body: QueryRequest | None = Depends(json_body(QueryRequest)),
    context: GatewayContext = Depends(get_context),
    service: TableService = Depends(get_table_service),
):
    """Execute {query, params?} and return all rows plus engine metadata."""
    query = body.query if body else None
    params = body.params if body else None
    envelope = await service.run_query(query, params)
    return envelope_response(envelope, context.settings)
