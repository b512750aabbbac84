from typing import Optional
from datetime import datetime

from .common import ApiModel, AuthorSummary


class CommentResponse(ApiModel):
    id: int
    text: str
    campground_id: int
    author_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    author: Optional[AuthorSummary] = None
