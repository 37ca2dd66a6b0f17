"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.api.dependencies import get_database
from app.api.responses import Tags, error_responses
from app.core.config import settings
from app.db.session import Database

router = APIRouter()


class HealthStatus(BaseModel):
    """Health status model."""

    status: str
    version: str
    environment: str

    model_config = {"json_schema_extra": {"example": {"status": "ok", "version": "1.0.0", "environment": "development"}}}


class DatabaseHealthStatus(BaseModel):
    """Database health status model."""

    status: str
    database: str

    model_config = {"json_schema_extra": {"example": {"status": "ok", "database": "connected"}}}


@router.get(
    "",
    response_model=HealthStatus,
    summary="Basic health check endpoint",
    description="Reports that the process is serving. Does not touch the database.",
    responses={200: {"description": "Service is healthy"}},
    tags=[Tags.HEALTH],
)
async def health_check() -> HealthStatus:
    return HealthStatus(status="ok", version=settings.VERSION, environment=settings.ENVIRONMENT)


@router.get(
    "/db",
    response_model=DatabaseHealthStatus,
    summary="Database health check endpoint",
    description="Runs a round-trip query against the database.",
    responses={200: {"description": "Database is reachable"}, **error_responses(status.HTTP_503_SERVICE_UNAVAILABLE)},
    tags=[Tags.HEALTH],
)
async def health_check_db(database: Database = Depends(get_database)) -> DatabaseHealthStatus:
    """
    Database liveness check.

    A failed round trip raises LivenessError, reported as 503.
    """
    await database.check_liveness()
    return DatabaseHealthStatus(status="ok", database="connected")
