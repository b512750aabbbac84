"""
YelpCamp API - FastAPI application entry point.
"""
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import IdentityResolver, TokenIdentityResolver
from .config import Settings, get_settings
from .database import Database
from .limiter import limiter
from .logging_config import api_logger
from .middleware import SecurityHeadersMiddleware, RequestIdMiddleware, RequestLoggingMiddleware
from .responses import (
    ApiException,
    api_exception_handler,
    http_exception_handler,
    rate_limit_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from .routes import (
    auth_router,
    campgrounds_router,
    comments_router,
    health_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database at startup and release it at shutdown."""
    settings: Settings = app.state.settings

    database = Database(settings.database_url, echo=settings.database_echo)
    database.create_all()
    app.state.database = database
    if getattr(app.state, "identity_resolver", None) is None:
        app.state.identity_resolver = TokenIdentityResolver(settings)

    api_logger.info(
        "YelpCamp API started",
        environment=settings.environment,
        database=database.engine.dialect.name,
    )

    yield  # App is running

    database.dispose()
    api_logger.info("YelpCamp API stopped")


def create_app(
    settings: Optional[Settings] = None,
    identity_resolver: Optional[IdentityResolver] = None,
) -> FastAPI:
    """Build the application. Tests pass their own settings and resolver."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Campground listings, reviews and comments",
        version=settings.version,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.identity_resolver = identity_resolver

    # Add rate limiter to app state
    app.state.limiter = limiter

    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Security headers middleware
    app.add_middleware(SecurityHeadersMiddleware)

    # Request logging middleware (only in debug mode)
    if settings.debug:
        app.add_middleware(RequestLoggingMiddleware)

    # Outside request logging so its lines carry the id
    app.add_middleware(RequestIdMiddleware)

    # CORS - credentials are needed for the auth cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        max_age=3600,  # Cache preflight requests for 1 hour
    )

    # Routes
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(campgrounds_router)
    app.include_router(comments_router)

    return app


app = create_app()


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "yelpcamp.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "3001")),
        log_level="info",
    )
