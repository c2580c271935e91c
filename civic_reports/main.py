"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from civic_reports import __version__
from civic_reports.config import get_settings
from civic_reports.database import engine, init_db, AsyncSessionLocal

# Import routers
from civic_reports.routers import health, reference, reports

# Import middleware
from civic_reports.middleware import logging_middleware, register_exception_handlers
from civic_reports.utils.logger import configure_logging, get_logger

settings = get_settings()

# Configure logging early
configure_logging(log_level=settings.log_level, debug=settings.debug)
log = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    log.info(
        "starting application",
        environment=settings.environment,
        debug=settings.debug,
        log_level=settings.log_level,
    )
    await init_db()
    log.info("database initialized")

    if settings.seed_on_startup:
        from civic_reports.seed import seed_reference_data

        async with AsyncSessionLocal() as db:
            city_count, category_count = await seed_reference_data(db)
        log.info("reference data loaded", cities=city_count, categories=category_count)

    yield

    log.info("shutting down application")
    await engine.dispose()
    log.info("database connections closed")


app = FastAPI(
    title="Civic Reports API",
    description="File civic issue reports and track their resolution",
    version=__version__,
    lifespan=lifespan,
)

# Register exception handlers first
register_exception_handlers(app)

# CORS middleware (empty origin list reflects any origin, with credentials)
_cors_origins = settings.get_cors_origins_list()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_origin_regex=None if _cors_origins else ".*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging middleware
app.middleware("http")(logging_middleware)

# Register routers
app.include_router(health.router, tags=["Health"])
app.include_router(reference.router)
app.include_router(reports.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Civic Reports API",
        "version": __version__,
        "endpoints": {
            "health": "/health",
            "cities": "/cities",
            "categories": "/categories",
            "reports": "/reports",
        },
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "civic_reports.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
