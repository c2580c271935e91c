"""Repository layer for data access."""

from civic_reports.repositories.reference_repository import ReferenceRepository
from civic_reports.repositories.report_repository import ReportRepository

__all__ = [
    "ReferenceRepository",
    "ReportRepository",
]
