"""
Event Seat Booking API - Main Application Entry Point

Sells a fixed, row-subdivided seat inventory under contention:
- Fail-fast per-row locking so a row is never oversold
- Lowest-numbered-first seat assignment with a group discount
- Structured logging with request correlation
- Prometheus metrics for booking outcomes and lock contention
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seatbook.api.deps import get_catalog, get_lock_registry
from seatbook.api.exception_handlers import register_exception_handlers
from seatbook.api.middleware import RequestLoggingMiddleware
from seatbook.api.router import api_router
from seatbook.core.config import get_settings
from seatbook.core.logging import get_logger, setup_logging
from seatbook.core.metrics import metrics_endpoint

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )

    # Build the catalog eagerly so sample events exist before the first request
    catalog = get_catalog()
    logger.info("catalog_ready", events=len(catalog.list_events()))

    yield

    held = get_lock_registry().held_count()
    if held:
        logger.warning("row_locks_held_at_shutdown", count=held)
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Seat inventory and booking API with per-row contention control",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "row_locks_held": get_lock_registry().held_count(),
    }


@app.get("/metrics", tags=["Health"])
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
