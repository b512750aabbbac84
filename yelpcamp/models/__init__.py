from .user import User
from .comment import Comment
from .campground import Campground

__all__ = [
    "User",
    "Campground",
    "Comment",
]
