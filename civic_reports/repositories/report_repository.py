"""Repository for Report and StatusLog operations."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from civic_reports.database import id_in_range, pre_write_checks, unit_of_work
from civic_reports.exceptions import NotFoundError, StatusTransitionError, ValidationError
from civic_reports.models.report import TITLE_MAX_LENGTH, Report, StatusLog
from civic_reports.models.status import (
    INITIAL_STATUS,
    ReportStatus,
    allowed_targets,
    can_transition,
)
from civic_reports.repositories.reference_repository import ReferenceRepository
from civic_reports.schemas.reports import ReportFilter
from civic_reports.utils.logger import get_logger, truncate

log = get_logger(__name__)

CREATED_NOTE = "created"


class ReportRepository:
    """Owns all writes to reports and status_logs."""

    def __init__(self, session: AsyncSession, reference_repository: ReferenceRepository):
        self.session = session
        self.reference_repository = reference_repository

    async def create(
        self,
        title: str,
        city_id: int,
        category_id: int,
        description: Optional[str] = None,
    ) -> Report:
        """
        Create a report together with its initial status log.

        The reference checks, the report insert and the status log insert run
        in the session's one transaction: either both rows are committed or
        neither is. Input and reference failures are raised before anything is
        written, so they leave the session and its loaded rows untouched.

        Raises:
            ValidationError: title is empty or too long
            NotFoundError: city or category does not exist
            StorageError: the database rejected the write
        """
        if not title or not title.strip():
            raise ValidationError("title", "title is required")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(
                "title", f"title must be at most {TITLE_MAX_LENGTH} characters"
            )

        async with pre_write_checks(self.session):
            if not await self.reference_repository.city_exists(city_id):
                raise NotFoundError("City", str(city_id))
            if not await self.reference_repository.category_exists(category_id):
                raise NotFoundError("Category", str(category_id))

        async with unit_of_work(self.session):
            report = Report(
                title=title,
                description=description,
                city_id=city_id,
                category_id=category_id,
                status=INITIAL_STATUS.value,
            )
            report.status_logs.append(StatusLog(status=INITIAL_STATUS.value, note=CREATED_NOTE))
            self.session.add(report)
            await self.session.flush()
            report_id = report.id

        log.info(
            "report created",
            report_id=report_id,
            city_id=city_id,
            category_id=category_id,
            title=truncate(title, 80),
        )
        return await self._reload(report_id)

    async def find_many(self, report_filter: ReportFilter) -> list[Report]:
        """List reports matching every set filter field, newest first."""
        for row_id in (report_filter.city_id, report_filter.category_id):
            if row_id is not None and not id_in_range(row_id):
                # No row can carry this id
                return []

        stmt = select(Report).options(selectinload(Report.city), selectinload(Report.category))

        if report_filter.city_id is not None:
            stmt = stmt.where(Report.city_id == report_filter.city_id)
        if report_filter.category_id is not None:
            stmt = stmt.where(Report.category_id == report_filter.category_id)
        if report_filter.status is not None:
            stmt = stmt.where(Report.status == report_filter.status.value)

        stmt = stmt.order_by(Report.created_at.desc(), Report.id.desc())

        log.debug("query reports", **report_filter.model_dump(exclude_none=True, mode="json"))
        result = await self.session.execute(stmt)
        reports = list(result.scalars().all())
        log.debug("query result", count=len(reports))
        return reports

    async def get_by_id(self, report_id: int) -> Optional[Report]:
        """Get report with city, category and status history loaded."""
        if not id_in_range(report_id):
            return None
        result = await self.session.execute(
            select(Report)
            .options(
                selectinload(Report.city),
                selectinload(Report.category),
                selectinload(Report.status_logs),
            )
            .where(Report.id == report_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_status_history(self, report_id: int) -> list[StatusLog]:
        """Status log entries for a report in the order they were written."""
        if not id_in_range(report_id):
            return []
        result = await self.session.execute(
            select(StatusLog).where(StatusLog.report_id == report_id).order_by(StatusLog.id.asc())
        )
        return list(result.scalars().all())

    async def append_status(
        self,
        report_id: int,
        status: ReportStatus,
        note: Optional[str] = None,
    ) -> Report:
        """
        Move a report to a new status.

        The transition is checked against the stored status before anything is
        written, so a refused move leaves the session untouched. The write then
        locks the report row, checks again against the locked status, and
        stores the new status log and the report's status in one transaction.

        Raises:
            NotFoundError: report does not exist
            StatusTransitionError: the move is not in the transition table
            StorageError: the database rejected the write
        """
        if not id_in_range(report_id):
            raise NotFoundError("Report", str(report_id))

        async with pre_write_checks(self.session):
            result = await self.session.execute(
                select(Report.status).where(Report.id == report_id)
            )
            stored_status = result.scalar_one_or_none()
            if stored_status is None:
                raise NotFoundError("Report", str(report_id))
            _check_transition(ReportStatus(stored_status), status)

        async with unit_of_work(self.session):
            result = await self.session.execute(
                select(Report)
                .where(Report.id == report_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            report = result.scalar_one_or_none()
            if report is None:
                raise NotFoundError("Report", str(report_id))

            # Another writer may have moved the report since the first check
            current = ReportStatus(report.status)
            _check_transition(current, status)

            self.session.add(StatusLog(report_id=report.id, status=status.value, note=note))
            report.status = status.value
            await self.session.flush()

        log.info(
            "report status changed",
            report_id=report_id,
            from_status=current.value,
            to_status=status.value,
        )
        return await self._reload(report_id)

    async def _reload(self, report_id: int) -> Report:
        report = await self.get_by_id(report_id)
        if report is None:
            raise NotFoundError("Report", str(report_id))
        return report


def _check_transition(current: ReportStatus, target: ReportStatus) -> None:
    if not can_transition(current, target):
        raise StatusTransitionError(current.value, target.value, allowed_targets(current))
