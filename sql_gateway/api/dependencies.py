"""API Dependencies: per-process context, API key guard and table-name guard.

Invariants:
    - GatewayContext is built once by create_app() and only read afterwards
    - require_api_key runs before any other dependency of a protected route
    - valid_table runs before body validation: a bad table name wins over a bad body
    - Write and query bodies are parsed as JSON whatever the Content-Type header says

Design Decisions:
    - Context on app.state over module globals: tests build isolated apps
    - APIKeyHeader(auto_error=False): the 401 envelope is ours, not FastAPI's 403
"""

from dataclasses import dataclass
from typing import Any

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader
from pydantic import TypeAdapter, ValidationError

from sql_gateway.config import Settings
from sql_gateway.core.authenticate import API_KEY_HEADER, is_authorized
from sql_gateway.core.domain_types import TableName
from sql_gateway.core.errors import (
    InvalidRequestDataError,
    UnauthorizedError,
    validation_details,
)
from sql_gateway.core.identifiers import validate_table_name
from sql_gateway.infrastructure.database import DatabaseGateway
from sql_gateway.services.table_service import TableService

api_key_scheme = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


@dataclass(frozen=True)
class GatewayContext:
    """Everything a request needs: settings and the database gateway."""
    settings: Settings
    database: DatabaseGateway


def get_context(request: Request) -> GatewayContext:
    return request.app.state.gateway


def get_table_service(
    context: GatewayContext = Depends(get_context),
) -> TableService:
    return TableService(
        context.database, context.settings.hidden_table_prefixes,
    )


async def require_api_key(
    x_api_key: str | None = Security(api_key_scheme),
    context: GatewayContext = Depends(get_context),
) -> None:
    """Reject the request unless X-API-Key matches the configured secret."""
    if not is_authorized(x_api_key, context.settings.api_key):
        raise UnauthorizedError()


def valid_table(table: str) -> TableName:
    """Path parameter `table`, allow-listed."""
    return validate_table_name(table)


def json_body(schema: Any):
    """Dependency reading the raw body as JSON and validating it against schema.

    An empty body yields None. Clients that post JSON as a form
    (curl -d '{...}') are accepted as long as the bytes are JSON.
    """
    adapter = TypeAdapter(schema)

    async def parse(request: Request):
        raw = await request.body()
        if not raw.strip():
            return None
        try:
            return adapter.validate_json(raw)
        except ValidationError as e:
            errors = [{**err, "loc": ("body", *err["loc"])} for err in e.errors()]
            raise InvalidRequestDataError(validation_details(errors))

    return parse
