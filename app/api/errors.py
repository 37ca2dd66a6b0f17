"""
API error handling for consistent error responses across the application.
"""

from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import (
    CategoryAPIError,
    LivenessError,
    NotFoundError,
    StartupError,
    StoreError,
    ValidationError,
)


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    detail: str


# Single source of truth for error kind -> HTTP status
ERROR_STATUS_CODES: Dict[Type[CategoryAPIError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StartupError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    LivenessError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(exc: CategoryAPIError) -> int:
    """Resolve the HTTP status for an application error, walking its MRO."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(detail=message).model_dump())


def flatten_validation_errors(exc: RequestValidationError) -> str:
    def flatten_error(err: dict) -> str:
        location = ".".join(str(loc) for loc in err.get("loc", []))
        message = err.get("msg", "Validation error")
        return f"{location}: {message}"

    return " | ".join(flatten_error(err) for err in exc.errors())


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers for the FastAPI application.
    """

    @app.exception_handler(CategoryAPIError)
    async def application_exception_handler(request: Request, exc: CategoryAPIError) -> JSONResponse:
        """
        Translate application errors using ERROR_STATUS_CODES.
        """
        status_code = status_code_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"{type(exc).__name__}: {exc.message}")
        else:
            logger.warning(f"{type(exc).__name__}: {exc.message}")
        return error_response(status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Report malformed bodies and path parameters as validation errors.
        """
        logger.warning(f"Validation error: {exc.errors()}")
        return await application_exception_handler(request, ValidationError(flatten_validation_errors(exc)))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """
        Handle database errors that escaped the service layer.
        """
        logger.error(f"Database error: {exc}")
        return await application_exception_handler(request, StoreError())
