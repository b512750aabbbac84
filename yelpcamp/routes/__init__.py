from .auth import router as auth_router
from .campgrounds import router as campgrounds_router
from .comments import router as comments_router
from .health import router as health_router

__all__ = [
    "auth_router",
    "campgrounds_router",
    "comments_router",
    "health_router",
]
