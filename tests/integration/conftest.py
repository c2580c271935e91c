"""Integration test configuration with a throwaway SQLite database."""

import pytest
from typing import AsyncGenerator

from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    AsyncSession,
    async_sessionmaker,
    AsyncEngine,
)

from civic_reports.database import Base
from civic_reports.models import Report, StatusLog
from civic_reports.repositories.reference_repository import ReferenceRepository
from civic_reports.repositories.report_repository import ReportRepository
from civic_reports.seed import seed_reference_data
from civic_reports.services.lifecycle_service import LifecycleService

SEED_CITIES = ["Chișinău", "Bălți"]
SEED_CATEGORIES = [
    "Iluminat stradal",
    "Gropi / drumuri",
    "Gunoi / salubrizare",
    "Parcări / trafic",
    "Siguranță publică",
    "Zgomot",
    "Spații verzi",
    "Altele",
]


def pytest_collection_modifyitems(items):
    """Apply integration marker to all tests in this directory."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine with foreign key enforcement."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'civic.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded(session_factory) -> tuple[int, int]:
    """Seed the default catalogues in their own session."""
    async with session_factory() as session:
        return await seed_reference_data(session, SEED_CITIES, SEED_CATEGORIES)


def _make_service(session: AsyncSession) -> LifecycleService:
    reference_repository = ReferenceRepository(session)
    return LifecycleService(
        report_repository=ReportRepository(session, reference_repository),
        reference_repository=reference_repository,
    )


@pytest.fixture
def lifecycle_service(db_session) -> LifecycleService:
    return _make_service(db_session)


@pytest.fixture
def row_counts(session_factory):
    """Return (report_count, status_log_count) read through a fresh session."""

    async def _counts() -> tuple[int, int]:
        async with session_factory() as session:
            reports = await session.scalar(select(func.count()).select_from(Report))
            logs = await session.scalar(select(func.count()).select_from(StatusLog))
            return reports, logs

    return _counts


@pytest.fixture
def service_for():
    """Build a LifecycleService bound to the given session."""
    return _make_service


@pytest.fixture
def seed_catalogues() -> tuple[list[str], list[str]]:
    return SEED_CITIES, SEED_CATEGORIES
