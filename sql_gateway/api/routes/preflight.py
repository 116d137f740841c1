"""CORS Preflight: OPTIONS on any path, answered without authentication.

Invariants:
    - Registered last: it is the catch-all entry of the route table
    - Empty 204 body, CORS headers only
"""

from fastapi import APIRouter, Depends

from sql_gateway.api.dependencies import GatewayContext, get_context
from sql_gateway.api.responses import preflight_response

router = APIRouter(tags=["cors"])


@router.options("/{path:path}", include_in_schema=False)
async def preflight(context: GatewayContext = Depends(get_context)):
    return preflight_response(context.settings)
