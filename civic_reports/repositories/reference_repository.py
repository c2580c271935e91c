"""Repository for the city and category catalogues."""

from typing import Iterable, Type, TypeVar

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.database import id_in_range
from civic_reports.models.reference import City, Category
from civic_reports.utils.logger import get_logger

log = get_logger(__name__)

CatalogueModel = TypeVar("CatalogueModel", City, Category)


class ReferenceRepository:
    """Read access to reference data, plus the idempotent seed."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_cities(self) -> list[City]:
        """All cities, alphabetical."""
        result = await self.session.execute(select(City).order_by(City.name.asc()))
        return list(result.scalars().all())

    async def list_categories(self) -> list[Category]:
        """All categories, alphabetical."""
        result = await self.session.execute(select(Category).order_by(Category.name.asc()))
        return list(result.scalars().all())

    async def city_exists(self, city_id: int) -> bool:
        return await self._exists(City, city_id)

    async def category_exists(self, category_id: int) -> bool:
        return await self._exists(Category, category_id)

    async def count_cities(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(City))
        return result.scalar_one()

    async def count_categories(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(Category))
        return result.scalar_one()

    async def seed(
        self, cities: Iterable[str], categories: Iterable[str]
    ) -> tuple[int, int]:
        """
        Insert catalogue names that are not present yet.

        Names already stored are skipped, so running the seed again is a no-op.
        Caller is responsible for committing the transaction.

        Returns:
            Tuple of (city_count, category_count) after seeding
        """
        added_cities = await self._insert_missing(City, cities)
        added_categories = await self._insert_missing(Category, categories)
        await self.session.flush()

        city_count = await self.count_cities()
        category_count = await self.count_categories()
        log.info(
            "reference data seeded",
            cities_added=added_cities,
            categories_added=added_categories,
            city_count=city_count,
            category_count=category_count,
        )
        return city_count, category_count

    async def _exists(self, model: Type[CatalogueModel], row_id: int) -> bool:
        if not id_in_range(row_id):
            return False
        result = await self.session.execute(select(model.id).where(model.id == row_id))
        return result.scalar_one_or_none() is not None

    async def _insert_missing(self, model: Type[CatalogueModel], names: Iterable[str]) -> int:
        wanted = list(dict.fromkeys(n.strip() for n in names if n and n.strip()))
        if not wanted:
            return 0

        result = await self.session.execute(select(model.name).where(model.name.in_(wanted)))
        existing = set(result.scalars().all())

        missing = [name for name in wanted if name not in existing]
        self.session.add_all([model(name=name) for name in missing])
        return len(missing)
