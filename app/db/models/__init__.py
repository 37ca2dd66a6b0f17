"""
Database models.
"""

from app.db.models.category import Category

__all__ = [
    "Category",
]
