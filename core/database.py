"""Async SQLAlchemy database engine and session management.

Provides the async database layer with:
- Connection pooling (configurable pool_size/max_overflow)
- FastAPI dependency injection via get_session()
- Automatic session lifecycle (commit on success, rollback on error)
- PostgreSQL (asyncpg) or SQLite (aiosqlite) depending on DATABASE_URL
"""

from typing import Any, AsyncGenerator

from loguru import logger
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings, settings

# ---------------------------------------------------------------------------
# Engine & session factory
# ---------------------------------------------------------------------------


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine for the configured database URL."""
    engine_kwargs: dict[str, Any] = {"echo": config.db_echo}

    # SQLite pools reject sizing arguments
    if not config.is_sqlite:
        engine_kwargs.update(
            pool_size=config.db_pool_size,
            max_overflow=config.db_max_overflow,
            pool_pre_ping=True,
        )

    return create_async_engine(config.database_url, **engine_kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = build_engine(settings)
async_session_factory = build_session_factory(engine)


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session with automatic commit/rollback.

    Usage in FastAPI routes::

        @router.get("/items")
        async def list_items(session: AsyncSession = Depends(get_session)):
            result = await session.execute(select(Item))
            return result.scalars().all()
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


# ---------------------------------------------------------------------------
# Lifecycle hooks
# ---------------------------------------------------------------------------

async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create tables from models (dev/test only, no migrations)."""
    from core.models.base import Base
    import bookstore.models.db_models  # noqa: F401  registers the books table

    target = bind or engine
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured: {}", ", ".join(sorted(Base.metadata.tables)))


async def close_db() -> None:
    """Dispose of the connection pool on shutdown."""
    await engine.dispose()
    logger.info("Database engine disposed")
