"""
Shared OpenAPI response documentation and route tags.
"""

from typing import Any, Dict

from fastapi import status

from app.api.errors import ErrorResponse


class Tags:
    """API route tags for documentation grouping."""

    SERVICE = "Service"
    HEALTH = "Health"
    CATEGORIES = "Categories"


def error_responses(*status_codes: int) -> Dict[int | str, Dict[str, Any]]:
    """Build the ``responses`` mapping for a route from its failure codes."""
    return {code: {"model": ErrorResponse, "description": ERROR_DESCRIPTIONS[code]} for code in status_codes}


ERROR_DESCRIPTIONS: Dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Bad Request – Malformed body, bad identifier or missing name",
    status.HTTP_404_NOT_FOUND: "Not Found – No category with this ID",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "Internal Error – Database failure",
    status.HTTP_503_SERVICE_UNAVAILABLE: "Service Unavailable – Database unreachable",
}
