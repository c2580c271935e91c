"""Database models."""

from civic_reports.models.reference import City, Category
from civic_reports.models.report import Report, StatusLog
from civic_reports.models.status import ReportStatus

__all__ = [
    "City",
    "Category",
    "Report",
    "StatusLog",
    "ReportStatus",
]
