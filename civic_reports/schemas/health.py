"""Health check schemas."""

from typing import Literal

from pydantic import BaseModel


class DatabaseStatus(BaseModel):
    """Catalogue counts observed during the health check."""

    status: Literal["healthy", "unhealthy"]
    city_count: int | None = None
    category_count: int | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    ok: bool
    status: Literal["ok", "degraded"]
    env: str
    version: str
    db: DatabaseStatus
    timestamp: str
