"""
Application configuration using environment variables.
"""
import secrets
from functools import lru_cache
from fastapi import Request
from pydantic import model_validator
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "YelpCamp API"
    version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Security
    secret_key: Optional[str] = None
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    auth_cookie_name: str = "token"

    # Database
    database_url: str = "sqlite:///./yelpcamp.db"
    database_echo: bool = False

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",  # Nuxt frontend
        "http://localhost:5173",  # Vue frontend
        "http://localhost:3001",
    ]

    # Rate limiting
    login_rate_limit: str = "5/minute"
    register_rate_limit: str = "3/minute"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @model_validator(mode="after")
    def check_secret_key(self) -> "Settings":
        if not self.secret_key:
            if self.is_production:
                raise ValueError(
                    "SECRET_KEY must be set in production! "
                    "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\""
                )
            # Tokens will not survive a restart without an explicit key
            self.secret_key = secrets.token_urlsafe(32)
        return self

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings
