"""
Authentication routes for register, login, logout and the current user.
"""
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..auth import Identity, create_user_token, get_password_hash, get_required_user, verify_password
from ..config import Settings, get_app_settings
from ..database import get_db
from ..limiter import limiter, login_limit, register_limit
from ..logging_config import auth_logger
from ..models.user import User
from ..responses import Conflict, Unauthorized, not_found, success
from ..schemas import AuthResponse, SuccessResponse, UserResponse
from ..validation import LoginRequest, RegisterRequest

router = APIRouter(prefix="/api/auth", tags=["auth"])


def set_token_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )


def issue_session(user: User, response: Response, settings: Settings) -> AuthResponse:
    token = create_user_token(user.id, settings)
    set_token_cookie(response, token, settings)
    return AuthResponse(user=UserResponse.model_validate(user), access_token=token)


@router.post("/register", response_model=AuthResponse, status_code=201)
@limiter.limit(register_limit)
def register(
    request: Request,
    response: Response,
    user_data: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Register a new user account and log it in."""
    existing = db.query(User).filter(
        or_(User.username == user_data.username, User.email == user_data.email)
    ).first()
    if existing:
        raise Conflict("Username or email already exists")

    user = User(
        username=user_data.username,
        email=user_data.email,
        name=user_data.name,
        hashed_password=get_password_hash(user_data.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        db.rollback()
        raise Conflict("Username or email already exists")
    db.refresh(user)

    auth_logger.info("User registered", user_id=user.id, username=user.username)
    return issue_session(user, response, settings)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(login_limit)
def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Login with JSON body (username/password)."""
    user = db.query(User).filter(User.username == credentials.username).first()
    if not user or not verify_password(credentials.password, user.hashed_password):
        auth_logger.info("Failed login", username=credentials.username)
        raise Unauthorized("Invalid credentials")

    return issue_session(user, response, settings)


@router.post("/logout", response_model=SuccessResponse)
def logout(response: Response, settings: Settings = Depends(get_app_settings)):
    """
    Logout the current user.

    Tokens are stateless: this only clears the auth cookie. Clients holding
    the bearer token should discard it.
    """
    response.delete_cookie(settings.auth_cookie_name, path="/")
    return success("Logged out")


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Identity = Depends(get_required_user),
    db: Session = Depends(get_db),
):
    """Get current authenticated user."""
    user = db.query(User).filter(User.id == current_user.id).first()
    if not user:
        not_found("User")
    return UserResponse.model_validate(user)
