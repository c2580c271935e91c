"""Database connection and session management."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from civic_reports.config import get_settings
from civic_reports.exceptions import StorageError
from civic_reports.utils.logger import get_logger

log = get_logger(__name__)


# Base class for all models
class Base(DeclarativeBase):
    pass


# Primary keys are 32-bit INTEGER columns
MAX_ROW_ID = 2**31 - 1


def id_in_range(row_id: int) -> bool:
    """True when row_id can name a row; larger values overflow the driver."""
    return 1 <= row_id <= MAX_ROW_ID


# Create async engine
settings = get_settings()
engine = create_async_engine(
    settings.database_url,
    echo=settings.sql_echo,
    future=True,
    pool_pre_ping=True,
    pool_recycle=1800,
)

# Session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database sessions."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def unit_of_work(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a block of reads and writes as one transaction.

    Commits when the block exits cleanly. Any exception rolls the whole
    transaction back; SQLAlchemy failures are re-raised as StorageError with
    the original chained, everything else propagates unchanged.
    """
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        log.error("unit of work rolled back", error_type=type(exc).__name__, error=str(exc))
        raise StorageError() from exc
    except Exception:
        await session.rollback()
        raise


@asynccontextmanager
async def pre_write_checks(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run the lookups that decide whether a write may happen.

    Nothing has been written yet, so domain errors raised here propagate
    without a rollback and rows already loaded in the session stay usable.
    SQLAlchemy failures roll back and are re-raised as StorageError.
    """
    try:
        yield session
    except SQLAlchemyError as exc:
        await session.rollback()
        log.error("pre-write check failed", error_type=type(exc).__name__, error=str(exc))
        raise StorageError() from exc


async def init_db():
    """Initialize database (create tables)."""
    # Register models on the metadata before create_all
    import civic_reports.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
