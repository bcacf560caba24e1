"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode - create_async_engine for connection pooling,
AsyncSession for per-request database access, dependency injection via FastAPI.
Creating the engine doesn't connect; the first query does.
"""

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from devsocial.config import get_settings


def _engine_kwargs(url: str) -> dict:
    # SQLite (tests, local hacking) has no pool sizing knobs.
    if url.startswith("sqlite"):
        return {}
    return {"pool_size": 5, "max_overflow": 15}


_settings = get_settings()

engine = create_async_engine(
    _settings.database_url,
    echo=_settings.debug,
    **_engine_kwargs(_settings.database_url),
)

# Session factory - each request gets its own session.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """FastAPI dependency - yields a session per request, auto-closes."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
