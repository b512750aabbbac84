from typing import List, Optional
from datetime import datetime

from pydantic import BaseModel

from .common import ApiModel, AuthorSummary
from .comment import CommentResponse


class CampgroundResponse(ApiModel):
    id: int
    name: str
    price: str
    image: str
    description: str
    location: Optional[str] = None
    author_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    author: Optional[AuthorSummary] = None


class CampgroundDetail(CampgroundResponse):
    comments: List[CommentResponse] = []


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasMore: bool


class CampgroundListResponse(BaseModel):
    campgrounds: List[CampgroundResponse]
    pagination: PaginationMeta
