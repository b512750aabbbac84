"""
Input validation for request bodies and list queries.

Every model trims its text fields and reports failures with a single
human-readable message. ``validate()`` never raises: it returns either
the parsed model or the first failure message.
"""
import re
from dataclasses import dataclass
from typing import Annotated, Any, Generic, Optional, Type, TypeVar

from pydantic import AnyUrl, BaseModel, EmailStr, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.functional_validators import BeforeValidator
from pydantic_core import PydanticCustomError

T = TypeVar("T", bound=BaseModel)

MAX_NAME_LENGTH = 100
MAX_PRICE_LENGTH = 20
MAX_DESCRIPTION_LENGTH = 5000
MAX_LOCATION_LENGTH = 200
MAX_COMMENT_LENGTH = 500
MAX_PAGE_SIZE = 50

# Largest value a 64-bit INTEGER primary key can hold
MAX_ID = 2 ** 63 - 1
DEFAULT_PAGE_SIZE = 12

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")

# Messages for fields that are absent altogether, keyed by wire name
MISSING_FIELD_MESSAGES = {
    "name": "Campground name is required",
    "price": "Price is required",
    "image": "Image URL is required",
    "description": "Description is required",
    "campgroundId": "Invalid campground ID",
    "text": "Comment text is required",
    "username": "Username is required",
    "email": "Email is required",
    "password": "Password is required",
}

_url_adapter = TypeAdapter(AnyUrl)
_email_adapter = TypeAdapter(EmailStr)


def _fail(message: str):
    raise PydanticCustomError("value_error", message)


def _text(label: str, required: str, max_length: int, too_long: str):
    """Build a trimmed, non-empty, length-capped string type."""

    def check(value: Any) -> str:
        if not isinstance(value, str):
            _fail(f"{label} must be text")
        value = value.strip()
        if not value:
            _fail(required)
        if len(value) > max_length:
            _fail(too_long)
        return value

    return Annotated[str, BeforeValidator(check)]


def _check_location(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        _fail("Location must be text")
    value = value.strip()
    if len(value) > MAX_LOCATION_LENGTH:
        _fail("Location must be less than 200 characters")
    return value or None


def _check_url(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        _fail("Must be a valid URL")
    value = value.strip()
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        _fail("Must be a valid URL")
    # Stored as entered; AnyUrl would normalise it
    return value


def _check_campground_id(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        _fail("Invalid campground ID")
    return value


def _check_username(value: Any) -> str:
    if not isinstance(value, str):
        _fail("Username must be text")
    value = value.strip()
    if not value:
        _fail("Username is required")
    if not 3 <= len(value) <= 30:
        _fail("Username must be 3-30 characters")
    if not USERNAME_PATTERN.match(value):
        _fail("Username must contain only letters and numbers")
    return value


def _check_email(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        _fail("Email is required")
    try:
        return str(_email_adapter.validate_python(value.strip()))
    except PydanticValidationError:
        _fail("Must be a valid email address")


def _check_display_name(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        _fail("Name must be text")
    value = value.strip()
    if len(value) > 100:
        _fail("Name must be less than 100 characters")
    return value or None


def _check_login_password(value: Any) -> str:
    if not isinstance(value, str) or not value:
        _fail("Password is required")
    return value


def _check_password(value: Any) -> str:
    if not isinstance(value, str) or not value:
        _fail("Password is required")
    if len(value) < 6:
        _fail("Password must be at least 6 characters")
    return value


def _check_positive_int(label: str):
    def check(value: Any) -> int:
        if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            _fail(f"{label} must be a positive integer")
        return value

    return check


def _check_limit(value: Any) -> int:
    value = _check_positive_int("Limit")(value)
    if value > MAX_PAGE_SIZE:
        _fail(f"Limit must be at most {MAX_PAGE_SIZE}")
    return value


def _check_search(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        _fail("Search must be text")
    return value.strip() or None


CampgroundName = _text("Name", "Campground name is required", MAX_NAME_LENGTH, "Name must be less than 100 characters")
Price = _text("Price", "Price is required", MAX_PRICE_LENGTH, "Price must be less than 20 characters")
ImageUrl = Annotated[str, BeforeValidator(_check_url)]
Description = _text("Description", "Description is required", MAX_DESCRIPTION_LENGTH, "Description must be less than 5000 characters")
Location = Annotated[Optional[str], BeforeValidator(_check_location)]
CommentText = _text("Comment", "Comment text is required", MAX_COMMENT_LENGTH, "Comment must be less than 500 characters")
CampgroundId = Annotated[int, BeforeValidator(_check_campground_id)]


# ============================================================
# CAMPGROUNDS
# ============================================================

class CampgroundCreate(BaseModel):
    name: CampgroundName
    price: Price
    image: ImageUrl
    description: Description
    location: Location = None


class CampgroundUpdate(BaseModel):
    """Partial update: only the keys sent by the client are considered."""
    name: Optional[CampgroundName] = None
    price: Optional[Price] = None
    image: Optional[ImageUrl] = None
    description: Optional[Description] = None
    location: Location = None

    def changes(self) -> dict:
        """Column values to write.

        Falsy values are treated as not provided; ``location`` sent as
        null or empty clears the column.
        """
        values = {
            key: getattr(self, key)
            for key in ("name", "price", "image", "description")
            if getattr(self, key)
        }
        if "location" in self.model_fields_set:
            values["location"] = self.location or None
        return values


# ============================================================
# COMMENTS
# ============================================================

class CommentCreate(BaseModel):
    campground_id: CampgroundId = Field(alias="campgroundId")
    text: CommentText

    class Config:
        populate_by_name = True


class CommentUpdate(BaseModel):
    text: CommentText


# ============================================================
# LIST QUERY
# ============================================================

class ListQuery(BaseModel):
    search: Annotated[Optional[str], BeforeValidator(_check_search)] = None
    page: Annotated[int, BeforeValidator(_check_positive_int("Page"))] = 1
    limit: Annotated[int, BeforeValidator(_check_limit)] = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


# ============================================================
# AUTH
# ============================================================

class RegisterRequest(BaseModel):
    username: Annotated[str, BeforeValidator(_check_username)]
    email: Annotated[str, BeforeValidator(_check_email)]
    password: Annotated[str, BeforeValidator(_check_password)]
    name: Annotated[Optional[str], BeforeValidator(_check_display_name)] = None


class LoginRequest(BaseModel):
    username: _text("Username", "Username is required", 30, "Username must be 3-30 characters")
    password: Annotated[str, BeforeValidator(_check_login_password)]


# ============================================================
# VALIDATION HELPER
# ============================================================

@dataclass
class ValidationResult(Generic[T]):
    """Outcome of ``validate``: ``data`` on success, else ``error``."""
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


def first_error_message(errors: list) -> str:
    """Reduce a list of pydantic error dicts to the first message."""
    if not errors:
        return "Validation failed"
    first = errors[0]
    if first.get("type") == "missing":
        field = str(first["loc"][-1]) if first.get("loc") else ""
        return MISSING_FIELD_MESSAGES.get(field, f"{field or 'Field'} is required")
    return first.get("msg") or "Validation failed"


def validate(model: Type[T], data: Any) -> ValidationResult[T]:
    """Parse ``data`` into ``model`` without raising."""
    if not isinstance(data, dict):
        return ValidationResult(success=False, error="Invalid request body")
    try:
        return ValidationResult(success=True, data=model.model_validate(data))
    except PydanticValidationError as e:
        return ValidationResult(success=False, error=first_error_message(e.errors()))
