"""Response Formatting: envelopes and pages rendered as HTTP responses with CORS headers.

Invariants:
    - Every response built here carries the CORS headers, errors included
    - JSON bodies go through jsonable_encoder (row values may be bytes, dates, decimals)
    - BLOB bytes render as a list of byte values, never decoded as text
    - Preflight answers are empty-bodied 204s
"""

from typing import Any

from fastapi import Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import HTMLResponse, JSONResponse

from sql_gateway.config import Settings

ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"

# jsonable_encoder's default for bytes is .decode(), which fails on binary data
_ENCODERS = {bytes: list}


def cors_headers(settings: Settings) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ", ".join(settings.cors_allow_headers),
    }


def envelope_response(
    envelope: dict[str, Any],
    settings: Settings,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(envelope, custom_encoder=_ENCODERS),
        headers=cors_headers(settings),
    )


def html_response(content: str, settings: Settings) -> HTMLResponse:
    return HTMLResponse(content=content, headers=cors_headers(settings))


def preflight_response(settings: Settings) -> Response:
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=cors_headers(settings),
    )
