"""One-time loader for the city and category catalogues.

Run with ``python -m civic_reports.seed``. Safe to run repeatedly: names that
already exist are left alone.
"""

import asyncio
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from civic_reports.config import get_settings
from civic_reports.repositories.reference_repository import ReferenceRepository
from civic_reports.utils.logger import configure_logging, get_logger

log = get_logger(__name__)


async def seed_reference_data(
    session: AsyncSession,
    cities: Optional[Iterable[str]] = None,
    categories: Optional[Iterable[str]] = None,
) -> tuple[int, int]:
    """
    Seed cities and categories and commit.

    Args:
        session: Database session
        cities: City names, defaults to the configured catalogue
        categories: Category names, defaults to the configured catalogue

    Returns:
        Tuple of (city_count, category_count) after seeding
    """
    settings = get_settings()
    repo = ReferenceRepository(session)
    try:
        counts = await repo.seed(
            cities if cities is not None else settings.get_seed_cities(),
            categories if categories is not None else settings.get_seed_categories(),
        )
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    return counts


async def main() -> None:
    from civic_reports.database import AsyncSessionLocal, engine, init_db

    await init_db()
    try:
        async with AsyncSessionLocal() as session:
            city_count, category_count = await seed_reference_data(session)
        log.info("seed done", cities=city_count, categories=category_count)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    settings = get_settings()
    configure_logging(log_level=settings.log_level, debug=settings.debug)
    asyncio.run(main())
