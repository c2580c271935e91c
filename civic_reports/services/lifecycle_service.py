"""Service for the report lifecycle: submission, queries and status changes."""

import re
from typing import Any, Mapping, Optional

from civic_reports.exceptions import NotFoundError, ValidationError
from civic_reports.models.reference import City, Category
from civic_reports.models.report import Report, StatusLog
from civic_reports.models.status import ReportStatus
from civic_reports.repositories.reference_repository import ReferenceRepository
from civic_reports.repositories.report_repository import ReportRepository
from civic_reports.schemas.reports import ReportFilter
from civic_reports.utils.logger import get_logger

log = get_logger(__name__)

# Optional minus, then ASCII digits
_INTEGER_RE = re.compile(r"-?[0-9]+")

# Inbound key -> ReportFilter field
FILTER_FIELDS = {
    "cityId": "city_id",
    "city_id": "city_id",
    "categoryId": "category_id",
    "category_id": "category_id",
    "status": "status",
}


def coerce_id(value: Any, field: str, required: bool = True) -> Optional[int]:
    """
    Convert an externally supplied identifier to int.

    Accepts ints and strings of ASCII digits with an optional leading minus
    (surrounding whitespace ignored).
    ``None`` and empty strings count as absent.

    Raises:
        ValidationError: value is absent but required, or not an integer
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(field, f"{field} is required")
        return None

    # bool is an int subclass but never a valid id
    if isinstance(value, bool):
        raise ValidationError(field, f"{field} must be a number")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_RE.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                # Longer than the interpreter converts
                raise ValidationError(field, f"{field} is out of range")
    raise ValidationError(field, f"{field} must be a number")


def coerce_status(value: Any, field: str = "status") -> Optional[ReportStatus]:
    """Convert an inbound status string to ReportStatus. Empty means absent."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, ReportStatus):
        return value
    try:
        return ReportStatus(str(value).strip().upper())
    except ValueError:
        valid = ", ".join(s.value for s in ReportStatus)
        raise ValidationError(field, f"{field} must be one of: {valid}")


class LifecycleService:
    """Orchestrates report creation, filtering and status transitions."""

    def __init__(
        self,
        report_repository: ReportRepository,
        reference_repository: ReferenceRepository,
    ):
        self.report_repository = report_repository
        self.reference_repository = reference_repository

    async def submit_report(self, raw_input: Mapping[str, Any]) -> Report:
        """
        File a new report from loosely typed input.

        Expected keys: ``title``, optional ``description``, ``cityId`` and
        ``categoryId`` (snake_case spellings are accepted too). Ids may be
        ints or numeric strings.
        """
        title = raw_input.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValidationError("title", "title is required")

        description = raw_input.get("description")
        if description is not None and not isinstance(description, str):
            raise ValidationError("description", "description must be a string")

        city_id = coerce_id(_first(raw_input, "cityId", "city_id"), "cityId")
        category_id = coerce_id(_first(raw_input, "categoryId", "category_id"), "categoryId")

        return await self.report_repository.create(
            title=title.strip(),
            description=description,
            city_id=city_id,
            category_id=category_id,
        )

    async def query_reports(self, raw_filter: Optional[Mapping[str, Any]] = None) -> list[Report]:
        """List reports matching the given filter. Unknown keys are rejected."""
        report_filter = build_filter(raw_filter or {})
        return await self.report_repository.find_many(report_filter)

    async def get_report(self, report_id: Any) -> Report:
        report = await self.report_repository.get_by_id(coerce_id(report_id, "reportId"))
        if report is None:
            raise NotFoundError("Report", str(report_id))
        return report

    async def get_history(self, report_id: Any) -> list[StatusLog]:
        """Status history of an existing report, oldest first."""
        report = await self.get_report(report_id)
        return await self.report_repository.get_status_history(report.id)

    async def change_status(
        self, report_id: Any, raw_status: Any, note: Optional[str] = None
    ) -> Report:
        """Move a report to a new status, recording the change in its history."""
        status = coerce_status(raw_status)
        if status is None:
            raise ValidationError("status", "status is required")

        return await self.report_repository.append_status(
            coerce_id(report_id, "reportId"), status, note=note
        )

    async def list_cities(self) -> list[City]:
        return await self.reference_repository.list_cities()

    async def list_categories(self) -> list[Category]:
        return await self.reference_repository.list_categories()


def build_filter(raw_filter: Mapping[str, Any]) -> ReportFilter:
    """Validate every inbound filter field and build the closed ReportFilter."""
    unknown = sorted(k for k in raw_filter if k not in FILTER_FIELDS)
    if unknown:
        raise ValidationError(unknown[0], f"Unsupported filter: {unknown[0]}")

    return ReportFilter(
        city_id=coerce_id(_first(raw_filter, "cityId", "city_id"), "cityId", required=False),
        category_id=coerce_id(
            _first(raw_filter, "categoryId", "category_id"), "categoryId", required=False
        ),
        status=coerce_status(raw_filter.get("status")),
    )


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None
