from typing import Optional
from datetime import datetime

from .common import ApiModel


class UserResponse(ApiModel):
    id: str
    username: str
    email: str
    name: Optional[str] = None
    created_at: datetime


class AuthResponse(ApiModel):
    user: UserResponse
    access_token: str
    token_type: str = "bearer"
