"""Async engine, session factory and the request-scoped ``get_db`` dependency.

The engine (and its connection pool) is created once per process at import
time, verified during application startup and disposed on shutdown.
"""

from collections.abc import AsyncIterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config import get_settings

_settings = get_settings()

engine = create_async_engine(
    _settings.database_url,
    echo=_settings.db_echo,
    pool_size=_settings.db_pool_size,
    max_overflow=_settings.db_max_overflow,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield one session per request; commit on success, roll back on failure."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def flush_or_conflict(session: AsyncSession, message: str) -> None:
    """Flush pending changes, reporting unique-constraint violations as ``ValueError``."""
    try:
        await session.flush()
    except IntegrityError as exc:
        raise ValueError(f"{message}: {exc.orig}") from exc
