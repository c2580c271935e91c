"""Health check router."""

from fastapi import APIRouter
from datetime import datetime, timezone
from civic_reports import __version__
from civic_reports.schemas.health import DatabaseStatus, HealthResponse
from civic_reports.dependencies import ReferenceRepoDep
from civic_reports.config import get_settings
from civic_reports.utils.logger import get_logger

router = APIRouter()
log = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(reference_repo: ReferenceRepoDep) -> HealthResponse:
    """
    Health check with database connectivity.

    Reports catalogue counts when the database answers, otherwise marks the
    service as degraded.
    """
    settings = get_settings()
    overall_status = "ok"

    try:
        city_count = await reference_repo.count_cities()
        category_count = await reference_repo.count_categories()
        db = DatabaseStatus(
            status="healthy", city_count=city_count, category_count=category_count
        )
    except Exception as e:
        log.error("health check failed", service="database", error=str(e))
        db = DatabaseStatus(status="unhealthy")
        overall_status = "degraded"

    return HealthResponse(
        ok=overall_status == "ok",
        status=overall_status,
        env=settings.environment,
        version=__version__,
        db=db,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
