"""
Database engine, session factory and schema helpers.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from loguru import logger
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.exceptions import LivenessError, StartupError

# Base class for all models
Base = declarative_base()


class Database:
    """
    Owns the async engine and session factory for one database.

    A single instance is created at startup and handed to request handlers
    through FastAPI dependencies.
    """

    def __init__(self, url: str, echo: bool = False, **engine_options: Any):
        self.url = url
        options: Dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        if make_url(url).get_backend_name() == "postgresql":
            options.update(pool_size=10, max_overflow=20)
        options.update(engine_options)

        self.engine: AsyncEngine = create_async_engine(url, **options)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            expire_on_commit=False,
            autoflush=False,
            class_=AsyncSession,
        )

    @property
    def safe_url(self) -> str:
        """Connection URL with the password masked, for logs."""
        return make_url(self.url).render_as_string(hide_password=True)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session that commits on success and rolls back on error.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def connect(self) -> None:
        """
        Open one connection to make sure the database is reachable.

        Raises:
            StartupError: if the connection cannot be established
        """
        try:
            async with self.engine.connect():
                pass
        except Exception as e:
            raise StartupError(f"Failed to connect to database: {e}") from e

    async def create_schema(self) -> None:
        """Create missing tables. Existing tables are left as they are."""
        # Make sure every model is registered on the metadata
        import app.db.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def check_liveness(self) -> int:
        """
        Run a trivial round-trip query.

        Raises:
            LivenessError: if the query fails
        """
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(text("SELECT 1"))
                return int(result.scalar_one())
        except Exception as e:
            raise LivenessError(f"Database liveness check failed: {e}") from e

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")
