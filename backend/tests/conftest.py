"""Shared pytest fixtures for the hub backend test suite."""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# ---------------------------------------------------------------------------
# Override settings BEFORE any app code is imported so that the module-level
# engine never tries to reach a real Postgres.
# ---------------------------------------------------------------------------

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-unit-tests")
os.environ.setdefault("AUTH_REQUIRED", "true")

from app.core.database import Base, get_db  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
import app.models  # noqa: E402,F401


# ---------------------------------------------------------------------------
# Async engine / session for tests (SQLite in-memory)
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite://"


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Enforce foreign keys so ON DELETE SET NULL behaves as on Postgres."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON;")
    cursor.close()


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Yield a fresh async DB session backed by an in-memory SQLite database.

    A new engine is built for every test so that tables and the event loop
    are fully isolated.
    """
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=StaticPool)
    event.listen(engine.sync_engine, "connect", _set_sqlite_pragma)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


# ---------------------------------------------------------------------------
# Callers + JWT tokens
# ---------------------------------------------------------------------------

TEST_USER = "tester"


def make_headers(user: str, scope: str | list[str] | None) -> dict[str, str]:
    claims = {"sub": user}
    if scope is not None:
        claims["scope"] = scope
    return {"Authorization": f"Bearer {create_access_token(claims)}"}


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers for a caller holding every proxies scope."""
    return make_headers(TEST_USER, "proxies:*")


@pytest.fixture
def reader_headers() -> dict[str, str]:
    """Headers for a caller that may only read proxies."""
    return make_headers("reader", "proxies:get")


@pytest.fixture
def unscoped_headers() -> dict[str, str]:
    """Headers for an authenticated caller with an unrelated scope."""
    return make_headers("outsider", "applications:*")


# ---------------------------------------------------------------------------
# FastAPI test client (ASGI transport via httpx)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def client(db_session: AsyncSession):
    """Yield an httpx.AsyncClient wired to the FastAPI app.

    get_db is overridden to hand out the test SQLite session.
    """
    from app.main import app

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def headers_for():
    """Factory fixture: headers_for(user, scope) -> Authorization headers."""
    return make_headers
