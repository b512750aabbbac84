"""
Ownership checks for campgrounds and comments.

Only the author of a row may change or delete it. There is no staff or
admin override.
"""
from typing import Optional, Type, TypeVar

from sqlalchemy.orm import Session

from .auth import Identity
from .responses import BadRequest, Forbidden, NotFound
from .validation import MAX_ID

M = TypeVar("M")


def is_owner(entity, identity: Identity) -> bool:
    """True only when the row has an author and it is the caller."""
    return entity.author_id is not None and entity.author_id == identity.id


def check_owner(entity, identity: Identity, message: Optional[str] = None) -> None:
    """Raise 403 unless ``identity`` authored ``entity``."""
    if not is_owner(entity, identity):
        raise Forbidden(message)


def get_or_404(db: Session, model: Type[M], entity_id: int, resource: str) -> M:
    if entity_id > MAX_ID:
        raise NotFound(f"{resource} not found")
    entity = db.query(model).filter(model.id == entity_id).first()
    if entity is None:
        raise NotFound(f"{resource} not found")
    return entity


def get_owned_or_404(
    db: Session,
    model: Type[M],
    entity_id: int,
    identity: Identity,
    resource: str,
    forbidden_message: Optional[str] = None,
) -> M:
    """Load a row for mutation: 404 if absent, 403 if the caller is not its author."""
    entity = get_or_404(db, model, entity_id, resource)
    check_owner(entity, identity, forbidden_message)
    return entity


def parse_id(value: str, resource: str) -> int:
    """Parse a path id, rejecting anything but a positive integer with 400."""
    text = value.strip() if isinstance(value, str) else ""
    if not (text.isascii() and text.isdigit()) or int(text) < 1:
        raise BadRequest(f"{resource} ID must be a valid number")
    entity_id = int(text)
    # Well-formed but beyond the key range: no such row can exist
    if entity_id > MAX_ID:
        raise NotFound(f"{resource} not found")
    return entity_id
