"""
Pydantic schemas for the categories resource.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


def _require_name(v: Any) -> Any:
    if v is None or (isinstance(v, str) and not v.strip()):
        raise ValueError("name is required")
    return v


class CategoryBase(BaseModel):
    """
    Base schema for category data.
    """

    name: str = Field(..., max_length=255, description="Category name")
    description: Optional[str] = Field(None, description="Category description")


class CategoryCreate(CategoryBase):
    """
    Schema for creating a new category.
    """

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> Any:
        return _require_name(v)


class CategoryUpdate(BaseModel):
    """
    Schema for updating a category.

    Fields left out of the request body are not changed.
    """

    name: Optional[str] = Field(None, max_length=255, description="Category name")
    description: Optional[str] = Field(None, description="Category description")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> Any:
        # Only runs when the field is sent; an explicit null is rejected
        return _require_name(v)


class CategoryResponse(CategoryBase):
    """
    Schema for category response.
    """

    id: int = Field(..., description="Category ID")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "name": "Books",
                    "description": "Printed and digital books",
                    "created_at": "2024-01-01T00:00:00Z",
                    "updated_at": "2024-01-01T00:00:00Z",
                }
            ]
        },
    }
