"""
Amicus Subscription API Server

Entry point for the FastAPI application.
"""

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from amicus_api import __version__
from amicus_api.api import router as api_router
from amicus_api.core.config import get_settings
from amicus_api.core.errors import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from amicus_api.core.log import configure_logging
from amicus_api.core.store import close_store_client, get_store_client
from amicus_api.schemas.subscriptions import HealthResponse

log = structlog.get_logger()

HEALTH_MESSAGE = "Amicus Subscription API is running!"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="Amicus Subscription API",
        description="Collects email and SMS subscriptions.",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router)

    @app.get("/", response_model=HealthResponse, tags=["System"])
    async def health_check():
        """Liveness check."""
        return HealthResponse(message=HEALTH_MESSAGE)

    @app.on_event("startup")
    async def on_startup():
        log.info("app.starting", port=settings.port, table=settings.subscriptions_table)
        # Fail startup if the store client cannot be built.
        try:
            await get_store_client()
        except Exception as exc:
            log.error("store.client_failed", url=settings.supabase_url, error=str(exc))
            raise

    @app.on_event("shutdown")
    async def on_shutdown():
        log.info("app.stopping")
        await close_store_client()

    return app


app = create_app()
