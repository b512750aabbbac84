"""
Authentication utilities: password hashing, access tokens and identity resolution.

Route handlers only see an ``Identity``. How credentials map to an
identity is the job of the ``IdentityResolver`` stored on
``app.state.identity_resolver``.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from .config import Settings, get_app_settings
from .database import get_db
from .logging_config import auth_logger
from .models.user import User
from .responses import Unauthorized

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


class InvalidCredentials(Exception):
    """Credentials were supplied but do not identify a user."""


@dataclass(frozen=True)
class Identity:
    """The authenticated caller as seen by route handlers."""
    id: str
    email: str
    username: str
    name: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(id=user.id, email=user.email, username=user.username, name=user.name)


@dataclass(frozen=True)
class Credentials:
    """Raw request credentials: a bearer token from the header or the auth cookie."""
    token: Optional[str] = None


class IdentityResolver(Protocol):
    def resolve_identity(self, credentials: Credentials, db: Session) -> Optional[Identity]:
        """Return the caller's identity, None when no credentials were sent.

        Raises ``InvalidCredentials`` when credentials are present but unusable.
        """
        ...


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_user_token(user_id: str, settings: Settings) -> str:
    """Create an access token whose subject is the user id."""
    return create_access_token({"sub": user_id}, settings)


def verify_token(token: str, settings: Settings, expected_type: str = "access") -> Optional[dict]:
    """Verify a JWT token and return its payload."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    if payload.get("type", "access") != expected_type:
        return None
    return payload


class TokenIdentityResolver:
    """Resolves identities from signed access tokens issued by ``/api/auth``."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def resolve_identity(self, credentials: Credentials, db: Session) -> Optional[Identity]:
        if not credentials.token:
            return None

        payload = verify_token(credentials.token, self.settings)
        if not payload or not payload.get("sub"):
            raise InvalidCredentials("Invalid or expired token")

        user = db.query(User).filter(User.id == str(payload["sub"])).first()
        if user is None:
            raise InvalidCredentials("Token subject no longer exists")
        return Identity.from_user(user)


def get_identity_resolver(request: Request) -> IdentityResolver:
    return request.app.state.identity_resolver


def get_credentials(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Credentials:
    """Collect credentials from the Authorization header, falling back to the cookie."""
    return Credentials(token=token or request.cookies.get(settings.auth_cookie_name))


def get_current_user(
    credentials: Credentials = Depends(get_credentials),
    db: Session = Depends(get_db),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Optional[Identity]:
    """Get the current identity if any (optional auth, never blocks)."""
    try:
        return resolver.resolve_identity(credentials, db)
    except Exception as e:
        auth_logger.debug("Treating request as anonymous", reason=str(e))
        return None


def get_required_user(
    credentials: Credentials = Depends(get_credentials),
    db: Session = Depends(get_db),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> Identity:
    """Get the current identity, raising 401 if not authenticated."""
    try:
        identity = resolver.resolve_identity(credentials, db)
    except Exception as e:
        auth_logger.info("Rejected credentials", reason=str(e))
        raise Unauthorized("Invalid session", headers={"WWW-Authenticate": "Bearer"}) from e

    if identity is None:
        raise Unauthorized(headers={"WWW-Authenticate": "Bearer"})
    return identity
