"""
Service info and status snapshot endpoints.
"""

import time
from typing import Any, Dict

from fastapi import APIRouter

from app.api.responses import Tags
from app.core.config import settings

router = APIRouter()

ENDPOINTS: Dict[str, str] = {
    "GET /": "API info",
    "GET /health": "Basic health check",
    "GET /health/db": "Database health check",
    "GET /metrics": "Metrics endpoint",
    "GET /categories/": "Get all categories",
    "POST /categories/": "Create new category",
    "GET /categories/{id}": "Get category by ID",
    "PUT /categories/{id}": "Update category",
    "DELETE /categories/{id}": "Delete category",
}


@router.get("/", summary="Service information", tags=[Tags.SERVICE])
async def root() -> Dict[str, Any]:
    return {
        "message": f"{settings.PROJECT_NAME} is running",
        "version": settings.VERSION,
        "endpoints": ENDPOINTS,
    }


@router.get("/metrics", summary="Status snapshot for pollers", tags=[Tags.SERVICE])
async def metrics() -> Dict[str, Any]:
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "timestamp": int(time.time()),
    }
