from functools import lru_cache

from sqlalchemy.ext.asyncio import (AsyncEngine, AsyncSession,
                                    async_sessionmaker, create_async_engine)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from farmledger.infrastructure.config.settings import get_settings
from farmledger.infrastructure.exceptions import LedgerConfigurationError

SUPPORTED_DRIVERS = ("postgresql+asyncpg", "sqlite+aiosqlite")


# Modern SQLAlchemy 2.0 pattern
class Base(DeclarativeBase):
    """Base class for all ledger storage models"""

    pass


def create_ledger_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the ledger store.

    PostgreSQL gets a sized connection pool; an in-memory SQLite database is
    pinned to one connection so every session sees the same data.
    """
    if not database_url.startswith(SUPPORTED_DRIVERS):
        raise LedgerConfigurationError(
            f"Unsupported database URL '{database_url}'. "
            f"Use one of the async drivers: {', '.join(SUPPORTED_DRIVERS)}"
        )

    if database_url.startswith("postgresql"):
        return create_async_engine(
            database_url,
            echo=echo,
            pool_pre_ping=True,
            pool_size=20,
            max_overflow=30,
            pool_recycle=3600,
            connect_args={
                "server_settings": {"jit": "off"},
                "command_timeout": 60,
            },
        )

    if database_url in ("sqlite+aiosqlite://", "sqlite+aiosqlite:///:memory:"):
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(database_url, echo=echo)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@lru_cache
def get_engine() -> AsyncEngine:
    """Engine for the configured database, created once per process"""
    settings = get_settings()
    return create_ledger_engine(settings.database_url, echo=settings.database_echo)


async def create_schema(engine: AsyncEngine) -> None:
    """Create all ledger tables that do not exist yet"""
    # Models must be imported so their tables are registered on Base.metadata
    import farmledger.infrastructure.persistence.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
