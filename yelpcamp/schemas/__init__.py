from .auth import UserResponse, AuthResponse
from .campground import (
    CampgroundResponse,
    CampgroundDetail,
    CampgroundListResponse,
    PaginationMeta,
)
from .comment import CommentResponse
from .common import AuthorSummary, SuccessResponse

__all__ = [
    "UserResponse", "AuthResponse",
    "AuthorSummary", "CampgroundResponse", "CampgroundDetail", "CampgroundListResponse", "PaginationMeta",
    "CommentResponse",
    "SuccessResponse",
]
