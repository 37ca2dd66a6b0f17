"""
FastAPI API dependencies.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import StoreError
from app.db.session import Database
from app.services.categories import CategoryService


def get_database(request: Request) -> Database:
    """
    Return the Database created during application startup.
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise StoreError("Database is not initialized")
    return database


async def get_db_session(database: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting an async database session.
    """
    async with database.session() as session:
        yield session


def get_category_service(db: AsyncSession = Depends(get_db_session)) -> CategoryService:
    return CategoryService(db)
