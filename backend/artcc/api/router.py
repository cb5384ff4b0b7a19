"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from artcc.api.routes import (
    activity,
    audit,
    controllers,
    events,
    feedback,
    no_shows,
    resources,
    visitor_applications,
)

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(events.router)
api_router.include_router(controllers.router)
api_router.include_router(feedback.router)
api_router.include_router(no_shows.router)
api_router.include_router(visitor_applications.router)
api_router.include_router(resources.router)
api_router.include_router(activity.router)
api_router.include_router(audit.router)
