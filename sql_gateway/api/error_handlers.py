"""Error Handlers: global exception handlers mapping every failure to the envelope.

Invariants:
    - GatewayError → its own status and {success: false, error: message}
    - RequestValidationError → 400 "Invalid request data", field details in meta
    - Unmatched route or method → 404 "Route not found"
    - Exception (catch-all) → 500, never leaks internal details
    - Every handler answers with the CORS headers
    - Authentication precedes routing: uncredentialed requests that fail before
      reaching a route (unknown path, malformed body) are answered 401

Design Decisions:
    - Four-layer handler: domain (GatewayError), validation (Pydantic), routing
      (Starlette HTTPException), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sql_gateway.api.responses import envelope_response
from sql_gateway.core.authenticate import API_KEY_HEADER, is_authorized
from sql_gateway.core.envelope import failure
from sql_gateway.core.errors import (
    ErrorSeverity,
    GatewayError,
    InvalidRequestDataError,
    RouteNotFoundError,
    UnauthorizedError,
    validation_details,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_gateway_error_handler(app)
    _register_validation_error_handler(app)
    _register_route_error_handler(app)
    _register_generic_error_handler(app)


def _register_gateway_error_handler(app: FastAPI) -> None:
    """Register gateway domain/infrastructure error handler."""

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        return _gateway_error_response(request, exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        if not _is_authenticated(request):
            return _gateway_error_response(request, UnauthorizedError())
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return _gateway_error_response(
            request, InvalidRequestDataError(validation_details(exc.errors())),
        )


def _register_route_error_handler(app: FastAPI) -> None:
    """Register handler for Starlette's routing errors (404 / 405)."""

    @app.exception_handler(StarletteHTTPException)
    async def route_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if not _is_authenticated(request):
            return _gateway_error_response(request, UnauthorizedError())
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return _gateway_error_response(request, RouteNotFoundError())
        return envelope_response(
            failure(str(exc.detail)), _settings(request), exc.status_code,
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return envelope_response(
            failure("Internal server error"),
            _settings(request),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def _gateway_error_response(request: Request, exc: GatewayError):
    logger.log(
        _LOG_LEVELS[exc.severity],
        f"{exc.code}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.http_status,
            "table": getattr(exc, "table", None),
            "record_id": getattr(exc, "record_id", None),
        },
    )
    return envelope_response(
        exc.to_response(), _settings(request), exc.http_status,
    )


def _is_authenticated(request: Request) -> bool:
    return is_authorized(
        request.headers.get(API_KEY_HEADER), _settings(request).api_key,
    )


def _settings(request: Request):
    return request.app.state.gateway.settings

