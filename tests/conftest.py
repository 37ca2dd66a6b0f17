import os

os.environ["ENABLE_TRACING"] = "false"
os.environ["JSON_LOGS"] = "false"
os.environ["DB_AUTO_MIGRATE"] = "false"

from typing import AsyncGenerator  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.db.session import Database  # noqa: E402
from app.main import app  # noqa: E402

UNREACHABLE_DATABASE_URL = "sqlite+aiosqlite:////nonexistent-dir/missing/categories.db"


@pytest_asyncio.fixture(scope="function")
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'categories.db'}")
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session_factory() as session:
        yield session


async def _client_for(db) -> AsyncGenerator[AsyncClient, None]:
    app.state.database = db
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.state.database = None


@pytest_asyncio.fixture(scope="function")
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    async for ac in _client_for(database):
        yield ac


@pytest_asyncio.fixture(scope="function")
async def unreachable_client() -> AsyncGenerator[AsyncClient, None]:
    """Client whose database cannot be opened."""
    db = Database(UNREACHABLE_DATABASE_URL)
    async for ac in _client_for(db):
        yield ac
    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def bare_client() -> AsyncGenerator[AsyncClient, None]:
    """Client for an app that never finished startup."""
    async for ac in _client_for(None):
        yield ac


class CannotConnectNowError(Exception):
    """Driver-level error that SQLAlchemy passes through unwrapped."""


class RefusingEngine:
    """Engine stand-in whose connections fail with a raw driver error."""

    def __init__(self, engine):
        self.engine = engine

    def connect(self):
        raise CannotConnectNowError("the database system is starting up")

    async def dispose(self):
        await self.engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def refusing_database(tmp_path) -> AsyncGenerator[Database, None]:
    """Database whose driver refuses every connection."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'refusing.db'}")
    db.engine = RefusingEngine(db.engine)  # type: ignore[assignment]
    yield db
    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def refusing_client(refusing_database: Database) -> AsyncGenerator[AsyncClient, None]:
    async for ac in _client_for(refusing_database):
        yield ac
