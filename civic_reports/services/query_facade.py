"""Boundary between the HTTP layer and the report lifecycle."""

from typing import Optional

from civic_reports.schemas.reference import CategoryResponse, CityResponse
from civic_reports.schemas.reports import (
    ReportCreateRequest,
    ReportDetailResponse,
    ReportResponse,
    ReportWithHistoryResponse,
    StatusChangeRequest,
    StatusLogResponse,
)
from civic_reports.services.lifecycle_service import LifecycleService


class ReportQueryFacade:
    """Shapes inbound requests into lifecycle calls and results into responses."""

    def __init__(self, lifecycle_service: LifecycleService):
        self.lifecycle_service = lifecycle_service

    async def list_reports(
        self,
        city_id: Optional[str] = None,
        category_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[ReportDetailResponse]:
        raw_filter = {"cityId": city_id, "categoryId": category_id, "status": status}
        reports = await self.lifecycle_service.query_reports(raw_filter)
        return [ReportDetailResponse.model_validate(r) for r in reports]

    async def submit(self, payload: ReportCreateRequest) -> ReportResponse:
        report = await self.lifecycle_service.submit_report(payload.model_dump(by_alias=True))
        return ReportResponse.model_validate(report)

    async def get_report(self, report_id: int) -> ReportWithHistoryResponse:
        report = await self.lifecycle_service.get_report(report_id)
        return ReportWithHistoryResponse.model_validate(report)

    async def history(self, report_id: int) -> list[StatusLogResponse]:
        logs = await self.lifecycle_service.get_history(report_id)
        return [StatusLogResponse.model_validate(entry) for entry in logs]

    async def change_status(
        self, report_id: int, payload: StatusChangeRequest
    ) -> ReportWithHistoryResponse:
        report = await self.lifecycle_service.change_status(
            report_id, payload.status, note=payload.note
        )
        return ReportWithHistoryResponse.model_validate(report)

    async def list_cities(self) -> list[CityResponse]:
        cities = await self.lifecycle_service.list_cities()
        return [CityResponse.model_validate(c) for c in cities]

    async def list_categories(self) -> list[CategoryResponse]:
        categories = await self.lifecycle_service.list_categories()
        return [CategoryResponse.model_validate(c) for c in categories]
