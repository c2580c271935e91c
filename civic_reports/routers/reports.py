"""Civic issue reports router."""

from typing import Optional

from fastapi import APIRouter, Query, status

from civic_reports.dependencies import QueryFacadeDep
from civic_reports.schemas.reports import (
    ReportCreateRequest,
    ReportDetailResponse,
    ReportResponse,
    ReportWithHistoryResponse,
    StatusChangeRequest,
    StatusLogResponse,
)
from civic_reports.utils.logger import get_logger

log = get_logger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("", response_model=list[ReportDetailResponse])
async def list_reports(
    facade: QueryFacadeDep,
    city_id: Optional[str] = Query(None, alias="cityId"),
    category_id: Optional[str] = Query(None, alias="categoryId"),
    status_: Optional[str] = Query(None, alias="status"),
) -> list[ReportDetailResponse]:
    """List reports newest first, optionally filtered by city, category and status."""
    return await facade.list_reports(city_id=city_id, category_id=category_id, status=status_)


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def create_report(payload: ReportCreateRequest, facade: QueryFacadeDep) -> ReportResponse:
    """File a new report. It starts in status NEW with one history entry."""
    return await facade.submit(payload)


@router.get("/{report_id}", response_model=ReportWithHistoryResponse)
async def get_report(report_id: int, facade: QueryFacadeDep) -> ReportWithHistoryResponse:
    """Get a report with its city, category and status history."""
    return await facade.get_report(report_id)


@router.get("/{report_id}/history", response_model=list[StatusLogResponse])
async def get_report_history(report_id: int, facade: QueryFacadeDep) -> list[StatusLogResponse]:
    """Status history of a report, oldest first."""
    return await facade.history(report_id)


@router.post("/{report_id}/status", response_model=ReportWithHistoryResponse)
async def change_report_status(
    report_id: int, payload: StatusChangeRequest, facade: QueryFacadeDep
) -> ReportWithHistoryResponse:
    """Move a report to a new status."""
    return await facade.change_status(report_id, payload)
