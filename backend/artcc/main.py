"""
ARTCC Facility API - Main Application Entry Point

Membership backend for a virtual air traffic control facility:
- Event sign-ups and staff position assignment
- Activity report over the roster, cached in Redis
- No-show tracking, certifications and training notes
- Structured access logging with the acting controller's CID
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from artcc.core.config import get_settings
from artcc.core.exceptions import FacilityError
from artcc.core.logging import setup_logging, get_logger
from artcc.core.metrics import metrics_endpoint
from artcc.api.router import api_router
from artcc.api.middleware import AccessLogMiddleware
from artcc.db.session import dispose_engine
from artcc.services.cache_service import get_redis, close_redis, get_cache_stats

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        facility=settings.FACILITY_CODE,
        activity_feed=settings.ACTIVITY_FEED,
    )

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Activity reports will not be cached")

    yield

    await close_redis()
    await dispose_engine()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Roster, events and activity tracking for a virtual ARTCC",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(AccessLogMiddleware)

app.include_router(api_router)


@app.exception_handler(FacilityError)
async def facility_error_handler(request: Request, exc: FacilityError):
    if exc.status_code >= 500:
        logger.error("request_error", code=exc.code, error=exc.message)
    else:
        logger.info("request_rejected", code=exc.code, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, **exc.to_dict()},
    )


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_cache_stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "facility": settings.FACILITY_CODE,
        "docs": "/docs",
    }
