"""
YelpCamp health and service info routes.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from ..config import Settings, get_app_settings
from ..database import Database, get_database

router = APIRouter(tags=["health"])

START_TIME = datetime.now(timezone.utc)


def get_uptime() -> str:
    """Get process uptime as human-readable string"""
    delta = datetime.now(timezone.utc) - START_TIME
    hours, remainder = divmod(delta.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if delta.days > 0:
        return f"{delta.days}d {hours}h {minutes}m"
    elif hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    else:
        return f"{minutes}m {seconds}s"


@router.get("/")
def root(settings: Settings = Depends(get_app_settings)):
    """Service banner with the stack and endpoint map."""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "status": "healthy",
        "stack": {
            "framework": "FastAPI",
            "runtime": "Python",
            "orm": "SQLAlchemy",
            "auth": "JWT (python-jose)",
        },
        "endpoints": {
            "health": "/api/health",
            "campgrounds": "/api/campgrounds",
            "comments": "/api/comments",
            "auth": "/api/auth/*",
            "docs": "/api/docs" if settings.debug else None,
        },
    }


@router.get("/api/health")
def health_check(
    settings: Settings = Depends(get_app_settings),
    database: Database = Depends(get_database),
):
    """Health check endpoint for load balancers and monitoring."""
    database_ok = database.ping()
    return {
        "status": "healthy" if database_ok else "degraded",
        "environment": settings.environment,
        "version": settings.version,
        "uptime": get_uptime(),
        "database": "connected" if database_ok else "unreachable",
    }
