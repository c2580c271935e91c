"""Factory functions for business logic services."""

from sqlalchemy.ext.asyncio import AsyncSession
from civic_reports.repositories.reference_repository import ReferenceRepository
from civic_reports.repositories.report_repository import ReportRepository
from civic_reports.services.lifecycle_service import LifecycleService
from civic_reports.services.query_facade import ReportQueryFacade


def get_lifecycle_service(db_session: AsyncSession) -> LifecycleService:
    """
    Create LifecycleService with dependencies.

    Note: Not cached because depends on request-scoped db session.

    Args:
        db_session: Database session

    Returns:
        LifecycleService instance
    """
    reference_repository = ReferenceRepository(db_session)
    report_repository = ReportRepository(db_session, reference_repository)

    return LifecycleService(
        report_repository=report_repository,
        reference_repository=reference_repository,
    )


def get_query_facade(db_session: AsyncSession) -> ReportQueryFacade:
    """
    Create ReportQueryFacade over a request-scoped LifecycleService.

    Args:
        db_session: Database session

    Returns:
        ReportQueryFacade instance
    """
    return ReportQueryFacade(get_lifecycle_service(db_session))
