"""Civic issue report and its status history."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Integer, String, Text, ForeignKey, TIMESTAMP, Index, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from civic_reports.database import Base
from civic_reports.models.status import INITIAL_STATUS

TITLE_MAX_LENGTH = 200


if TYPE_CHECKING:
    from civic_reports.models.reference import City, Category


class Report(Base):
    """A single filed civic issue."""

    __tablename__ = "reports"
    __table_args__ = (
        Index("idx_reports_city_category_status", "city_id", "category_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    city_id: Mapped[int] = mapped_column(ForeignKey("cities.id"), nullable=False, index=True)
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id"), nullable=False, index=True
    )

    # Stored as plain text so new ReportStatus values need no schema change
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=INITIAL_STATUS.value, index=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    city: Mapped[City] = relationship("City")
    category: Mapped[Category] = relationship("Category")

    # Append-only: no delete cascade, rows are only ever added
    status_logs: Mapped[list[StatusLog]] = relationship(
        "StatusLog",
        back_populates="report",
        cascade="save-update, merge",
        order_by="StatusLog.id",
    )

    def __repr__(self):
        return f"<Report(id={self.id}, status='{self.status}', title='{self.title}')>"


class StatusLog(Base):
    """Audit entry recording one status value of a report."""

    __tablename__ = "status_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    report_id: Mapped[int] = mapped_column(ForeignKey("reports.id"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    note: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now()
    )

    report: Mapped[Report] = relationship("Report", back_populates="status_logs")

    def __repr__(self):
        return f"<StatusLog(report_id={self.report_id}, status='{self.status}')>"
