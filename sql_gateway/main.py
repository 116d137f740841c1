"""SQL Gateway API: FastAPI application factory and entry point.

Invariants:
    - Routes registered explicitly, in route-table priority order (no auto-discovery)
    - Global error handlers map every failure to the response envelope
    - GatewayContext (settings + database gateway) built once per app, kept on app.state
    - FastAPI's own /docs, /redoc and /openapi.json are off: the route table is fixed
    - No trailing-slash redirects: segment counts must match exactly

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Context built in create_app, not in lifespan: handlers work under test
      transports that never run the lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from sql_gateway.api.dependencies import GatewayContext
from sql_gateway.api.error_handlers import register_error_handlers
from sql_gateway.api.routes import docs, preflight, query, tables
from sql_gateway.config import Settings, get_settings
from sql_gateway.infrastructure.database import DatabaseGateway
from sql_gateway.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    context: GatewayContext = app.state.gateway
    settings = context.settings
    setup_logging(settings.log_level, settings.log_format)
    if not settings.api_key:
        logger.warning("API_KEY is not set: every protected route will answer 401")
    if await context.database.health_check():
        logger.info("SQL Gateway API started")
    else:
        logger.warning("SQL Gateway API started without database connectivity")
    yield
    await context.database.dispose()
    logger.info("SQL Gateway API shutting down")


def create_app(
    settings: Settings | None = None,
    database: DatabaseGateway | None = None,
) -> FastAPI:
    """Build the gateway app around one settings object and one database gateway."""
    settings = settings or get_settings()
    app = FastAPI(
        title="SQL Gateway API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.gateway = GatewayContext(
        settings=settings,
        database=database or DatabaseGateway(settings.database_url),
    )

    # Routes: explicit registration, route-table order
    app.include_router(docs.router)
    app.include_router(tables.router)
    app.include_router(query.router)
    app.include_router(preflight.router)

    register_error_handlers(app)
    return app


app = create_app()
