from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlmodel import SQLModel

from ...config import settings
# Registers the tables on SQLModel.metadata
from . import models  # noqa: F401


def to_async_url(database_url: str) -> str:
    """Map a sync database URL onto the matching async driver."""
    if database_url.startswith("sqlite+aiosqlite") or database_url.startswith(
        "postgresql+asyncpg"
    ):
        return database_url
    if database_url.startswith("sqlite"):
        return database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    if database_url.startswith("postgresql"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    raise ValueError(f"Unsupported database URL: {database_url}")


def _get_async_engine() -> AsyncEngine:
    """Create async engine with connection pooling for concurrent requests."""
    async_url = to_async_url(settings.effective_database_url)
    engine_kwargs: dict[str, int | bool]

    if async_url.startswith("sqlite"):
        engine_kwargs = {
            "echo": settings.debug,
        }
    else:
        engine_kwargs = {
            "echo": settings.debug,
            "pool_size": 20,
            "max_overflow": 15,
            "pool_recycle": 3600,  # seconds
            "pool_pre_ping": True,
        }

    return create_async_engine(async_url, **engine_kwargs)


_async_engine: AsyncEngine | None = None


def get_async_engine() -> AsyncEngine:
    """Get the async database engine with connection pooling."""
    global _async_engine
    if _async_engine is None:
        _async_engine = _get_async_engine()
    return _async_engine


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session with proper transaction management."""
    async with AsyncSession(get_async_engine()) as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_async_db(engine: AsyncEngine) -> None:
    """Initialize database tables using async engine."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
