"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.database import get_db
from civic_reports.factories.service_factories import get_query_facade
from civic_reports.repositories.reference_repository import ReferenceRepository
from civic_reports.services.query_facade import ReportQueryFacade


# Type aliases for cleaner router signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]


# Repository dependencies (request-scoped)
def get_reference_repository(db: DbSession) -> ReferenceRepository:
    """Get ReferenceRepository with database session."""
    return ReferenceRepository(db)


ReferenceRepoDep = Annotated[ReferenceRepository, Depends(get_reference_repository)]


# Service dependencies
def get_query_facade_dep(db: DbSession) -> ReportQueryFacade:
    """Get ReportQueryFacade with database session."""
    return get_query_facade(db)


QueryFacadeDep = Annotated[ReportQueryFacade, Depends(get_query_facade_dep)]
