"""Shared pytest fixtures for router integration tests."""

import pytest
from contextlib import ExitStack
from typing import AsyncGenerator
from unittest.mock import AsyncMock, Mock, patch

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession


# Mock database before importing app to avoid connection issues
@pytest.fixture(autouse=True)
def mock_database_init():
    """Mock database initialization for all router tests."""
    with ExitStack() as stack:
        stack.enter_context(patch("civic_reports.main.init_db", new_callable=AsyncMock))
        mock_engine = stack.enter_context(patch("civic_reports.main.engine"))
        mock_engine.dispose = AsyncMock()
        yield


@pytest.fixture
def mock_db_session():
    """Create a mock AsyncSession for router tests."""
    session = AsyncMock(spec=AsyncSession)

    mock_result = Mock()
    mock_result.scalar_one_or_none = Mock(return_value=None)
    mock_result.scalar_one = Mock(return_value=0)
    mock_result.scalars = Mock(return_value=Mock(all=Mock(return_value=[])))

    session.execute = AsyncMock(return_value=mock_result)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def mock_facade():
    """Create a mock ReportQueryFacade."""
    facade = AsyncMock()
    facade.list_reports = AsyncMock(return_value=[])
    facade.list_cities = AsyncMock(return_value=[])
    facade.list_categories = AsyncMock(return_value=[])
    return facade


@pytest.fixture
def mock_reference_repo():
    """Create a mock ReferenceRepository."""
    repo = AsyncMock()
    repo.count_cities = AsyncMock(return_value=2)
    repo.count_categories = AsyncMock(return_value=8)
    return repo


@pytest.fixture
def mock_settings():
    """Create mock settings."""
    settings = Mock()
    settings.environment = "test"
    settings.debug = False
    settings.log_level = "INFO"
    settings.cors_origins = ""
    settings.seed_on_startup = False
    return settings


@pytest.fixture
def client(mock_db_session, mock_facade, mock_reference_repo, mock_settings):
    """Create TestClient with all dependencies overridden."""
    from civic_reports.main import app
    from civic_reports.database import get_db
    from civic_reports.dependencies import get_query_facade_dep, get_reference_repository

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield mock_db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_query_facade_dep] = lambda: mock_facade
    app.dependency_overrides[get_reference_repository] = lambda: mock_reference_repo

    with patch("civic_reports.routers.health.get_settings", return_value=mock_settings):
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def real_facade_client(mock_db_session, mock_settings):
    """TestClient where only the database session is mocked."""
    from civic_reports.main import app
    from civic_reports.database import get_db

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield mock_db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()
