"""Async engine and session factory for the portal user database."""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from memberportal.config import settings


def is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def create_db_engine(url: str | None = None) -> AsyncEngine:
    """Engine for ``url`` or the configured database.

    PostgreSQL gets a small pool with pre-ping; the table is read once per
    request to resolve the session's member.
    """
    db_url = url or settings.effective_database_url
    if is_sqlite(db_url):
        return create_async_engine(db_url)
    return create_async_engine(db_url, pool_size=5, max_overflow=10, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
