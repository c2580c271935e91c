"""Shared pytest fixtures."""

# Clear settings cache before any imports to prevent stale values with coverage
from civic_reports.config import get_settings

get_settings.cache_clear()

import pytest
from unittest.mock import AsyncMock, Mock
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from civic_reports.models.reference import City, Category
from civic_reports.models.report import Report, StatusLog


# Database mocking fixtures


@pytest.fixture
def mock_async_session():
    """Create a mock AsyncSession for repository tests."""
    session = AsyncMock()

    # Mock result object for execute
    mock_result = Mock()
    mock_result.scalar_one_or_none = Mock(return_value=None)
    mock_result.scalar_one = Mock(return_value=0)
    mock_result.scalars = Mock(return_value=Mock(all=Mock(return_value=[])))
    mock_result.fetchall = Mock(return_value=[])
    mock_result.rowcount = 0

    session.execute = AsyncMock(return_value=mock_result)
    session.scalar = AsyncMock(return_value=0)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.add = Mock()

    # Emulate the database assigning primary keys on flush
    async def _flush():
        for call in session.add.call_args_list:
            obj = call.args[0]
            if getattr(obj, "id", 0) is None:
                obj.id = 1

    session.flush = AsyncMock(side_effect=_flush)
    session.refresh = AsyncMock()
    session.add_all = Mock()
    session.delete = AsyncMock()
    session.expire_all = Mock()

    # Mock begin_nested for savepoint tests
    @asynccontextmanager
    async def begin_nested():
        yield

    session.begin_nested = begin_nested

    return session


@pytest.fixture
def make_result():
    """Factory fixture for mock execute() results returning the given values."""

    def _make(scalar=None, scalars=None):
        result = Mock()
        result.scalar_one_or_none = Mock(return_value=scalar)
        result.scalar_one = Mock(return_value=scalar)
        result.scalars = Mock(return_value=Mock(all=Mock(return_value=scalars or [])))
        return result

    return _make


# Sample data fixtures


@pytest.fixture
def sample_city() -> City:
    return City(id=1, name="Chișinău")


@pytest.fixture
def sample_category() -> Category:
    return Category(id=1, name="Iluminat stradal")


@pytest.fixture
def sample_report(sample_city, sample_category) -> Report:
    """A persisted-looking report with its creation log."""
    now = datetime(2026, 10, 19, 9, 30, tzinfo=timezone.utc)
    report = Report(
        id=1,
        title="Bec stradal stins",
        description=None,
        city_id=sample_city.id,
        category_id=sample_category.id,
        status="NEW",
        created_at=now,
        updated_at=now,
    )
    report.city = sample_city
    report.category = sample_category
    report.status_logs.append(
        StatusLog(id=1, report_id=1, status="NEW", note="created", created_at=now)
    )
    return report
