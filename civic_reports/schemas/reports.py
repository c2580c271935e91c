"""Schemas for report operations."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from civic_reports.models.status import ReportStatus
from civic_reports.schemas.reference import CategoryResponse, CityResponse


class CamelModel(BaseModel):
    """Base model exposing camelCase on the wire and accepting both spellings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ReportFilter(BaseModel):
    """Closed set of recognised report filters. ``None`` means unconstrained."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    city_id: Optional[int] = None
    category_id: Optional[int] = None
    status: Optional[ReportStatus] = None


class ReportCreateRequest(CamelModel):
    """Inbound report creation payload. Ids may arrive as numeric strings."""

    title: Optional[str] = Field(None, description="Short summary of the issue")
    description: Optional[str] = Field(None, description="Free-form details")
    city_id: Optional[int | str] = Field(None, description="City id")
    category_id: Optional[int | str] = Field(None, description="Category id")


class StatusChangeRequest(CamelModel):
    """Inbound status transition payload."""

    status: str = Field(..., description="Target status")
    note: Optional[str] = Field(None, max_length=1000, description="Reason for the change")


class StatusLogResponse(CamelModel):
    """One entry of a report's status history."""

    id: int
    report_id: int
    status: str
    note: Optional[str] = None
    created_at: datetime


class ReportResponse(CamelModel):
    """Report record as returned on creation."""

    id: int = Field(..., description="Report ID")
    title: str
    description: Optional[str] = None
    city_id: int
    category_id: int
    status: str
    created_at: datetime = Field(..., description="When the report was filed")
    updated_at: datetime = Field(..., description="Last status change")


class ReportDetailResponse(ReportResponse):
    """Report enriched with its city and category."""

    city: CityResponse
    category: CategoryResponse


class ReportWithHistoryResponse(ReportDetailResponse):
    """Report enriched with reference data and full status history."""

    status_logs: list[StatusLogResponse]
