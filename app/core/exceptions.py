"""
Application exception hierarchy.

Services and the persistence layer raise these; the API layer translates
them into HTTP responses in ``app.api.errors``.
"""

from typing import Optional


class CategoryAPIError(Exception):
    """Base class for all application errors."""

    default_message = "Application error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CategoryAPIError):
    """Malformed input: bad body, bad identifier or missing required field."""

    default_message = "Invalid request"


class NotFoundError(CategoryAPIError):
    """No record matches the requested identifier."""

    default_message = "Record not found"


class StoreError(CategoryAPIError):
    """The underlying database operation failed."""

    default_message = "Database error"


class StartupError(CategoryAPIError):
    """The initial database connection could not be opened."""

    default_message = "Failed to connect to database"


class LivenessError(CategoryAPIError):
    """The database liveness round trip failed."""

    default_message = "Database is unavailable"
