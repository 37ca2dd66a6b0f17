"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from app.api.errors import register_exception_handlers
from app.api.middleware import AccessLogMiddleware, RecoveryMiddleware
from app.api.responses import Tags
from app.api.routes.categories import router as categories_router
from app.api.routes.health import router as health_router
from app.api.routes.service import router as service_router
from app.core.config import settings
from app.core.events import close_db_connection, connect_to_db
from app.core.logging import configure_logging
from app.core.metrics import setup_metrics
from app.core.tracing import instrument_engine, setup_tracing


def init_sentry() -> None:
    if not settings.SENTRY_DSN:
        return

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        release=f"{settings.SERVICE_NAME}@{settings.VERSION}",
    )
    logger.info("Sentry initialized")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan event handler for startup and shutdown events.

    A StartupError raised here aborts server startup.
    """
    init_sentry()

    database = await connect_to_db(settings)
    instrument_engine(database.engine)
    app.state.database = database
    logger.info(f"{settings.PROJECT_NAME} started in {settings.APP_MODE} mode")

    yield

    await close_db_connection(database)


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    configure_logging()

    docs_enabled = not settings.is_release
    application = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
        openapi_tags=[
            {"name": Tags.SERVICE, "description": "Service information and status"},
            {"name": Tags.HEALTH, "description": "Health check endpoints"},
            {"name": Tags.CATEGORIES, "description": "Category management endpoints"},
        ],
    )

    register_exception_handlers(application)

    # Middleware added last runs first: access log -> recovery -> CORS -> metrics
    if settings.ENABLE_METRICS:
        setup_metrics(application)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.CORS_ORIGINS_STR == "*" else settings.CORS_ORIGINS_STR.split(","),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    application.add_middleware(RecoveryMiddleware)
    application.add_middleware(AccessLogMiddleware)

    setup_tracing(application)

    application.include_router(service_router)
    application.include_router(health_router, prefix="/health")
    application.include_router(categories_router, prefix="/categories")

    return application


app = create_application()
