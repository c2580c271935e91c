"""Reference catalogue router: cities and categories."""

from typing import Optional

from fastapi import APIRouter, Query

from civic_reports.dependencies import QueryFacadeDep
from civic_reports.schemas.reference import CategoryResponse, CityResponse
from civic_reports.services.lifecycle_service import coerce_id

router = APIRouter(tags=["Reference"])


@router.get("/cities", response_model=list[CityResponse])
async def list_cities(facade: QueryFacadeDep) -> list[CityResponse]:
    """All cities, alphabetical."""
    return await facade.list_cities()


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(
    facade: QueryFacadeDep,
    city_id: Optional[str] = Query(None, alias="cityId"),
) -> list[CategoryResponse]:
    """
    All categories, alphabetical.

    Categories are shared by every city; ``cityId`` is validated but does not
    narrow the result.
    """
    coerce_id(city_id, "cityId", required=False)
    return await facade.list_categories()
