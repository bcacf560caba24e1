"""Test fixtures - a fresh in-memory database per test.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own aiosqlite in-memory engine. StaticPool keeps a
   single connection alive so every session sees the same database.
2. Tables are created from the ORM metadata, then dropped with the engine.
3. The app's get_db dependency is overridden to hand out that session.

Auth is NOT overridden: tests register, log in and send real tokens
through x-auth-token, so the whole verifier runs on every request.
"""

import os

# Must be set before devsocial is imported: settings are loaded once.
os.environ.setdefault("DEVSOCIAL_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DEVSOCIAL_BCRYPT_ROUNDS", "4")

import uuid

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from devsocial.config import get_settings
from devsocial.db.engine import get_db
from devsocial.db.models import Base
from devsocial.main import app


@pytest.fixture()
def settings():
    return get_settings()


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a throwaway in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # SQLite ignores foreign keys unless asked; PostgreSQL always enforces them.
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with the app's get_db overridden for testing."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def auth_headers(token: str) -> dict:
    return {"x-auth-token": token}


async def register_user(client, name: str = "Ana", email: str = None, password: str = "secret1") -> str:
    """Register a user through the API and return their token."""
    email = email or f"user-{uuid.uuid4().hex[:8]}@example.com"
    r = await client.post(
        "/api/users",
        json={"name": name, "email": email, "password": password},
    )
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest_asyncio.fixture()
async def token(client):
    """Token for a freshly registered user."""
    return await register_user(client)


@pytest_asyncio.fixture()
async def other_token(client):
    """Token for a second, unrelated user."""
    return await register_user(client, name="Bob")
