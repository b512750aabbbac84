"""
Campground routes: search/paginated listing and owner-only CRUD.
"""
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from ..auth import Identity, get_current_user, get_required_user
from ..database import get_db
from ..logging_config import api_logger
from ..models.campground import Campground
from ..models.comment import Comment
from ..permissions import get_owned_or_404, parse_id
from ..responses import ValidationError, deleted, not_found, pagination
from ..schemas import (
    CampgroundDetail,
    CampgroundListResponse,
    CampgroundResponse,
    PaginationMeta,
    SuccessResponse,
)
from ..validation import MAX_ID, CampgroundCreate, CampgroundUpdate, ListQuery, validate

router = APIRouter(prefix="/api/campgrounds", tags=["campgrounds"])


def list_query(
    search: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> ListQuery:
    """Validate the list query string; absent keys take their defaults."""
    raw = {"search": search, "page": page, "limit": limit}
    result = validate(ListQuery, {k: v for k, v in raw.items() if v is not None})
    if not result.success:
        raise ValidationError(result.error)
    return result.data


def campground_id_param(campground_id: str) -> int:
    return parse_id(campground_id, "Campground")


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_filter(search: str):
    """Case-insensitive substring match on name, description or location."""
    pattern = f"%{_escape_like(search)}%"
    return or_(
        Campground.name.ilike(pattern, escape="\\"),
        Campground.description.ilike(pattern, escape="\\"),
        Campground.location.ilike(pattern, escape="\\"),
    )


@router.get("", response_model=CampgroundListResponse, dependencies=[Depends(get_current_user)])
def list_campgrounds(
    query: ListQuery = Depends(list_query),
    db: Session = Depends(get_db),
):
    """List campgrounds, newest first, with optional search."""
    base = db.query(Campground)
    if query.search:
        base = base.filter(search_filter(query.search))

    total = base.order_by(None).count()

    campgrounds = []
    # An offset past the integer range is past the end of any table
    if query.offset <= MAX_ID:
        campgrounds = (
            base.options(joinedload(Campground.author))
            .order_by(Campground.created_at.desc(), Campground.id.desc())
            .offset(query.offset)
            .limit(query.limit)
            .all()
        )

    return CampgroundListResponse(
        campgrounds=[CampgroundResponse.model_validate(c) for c in campgrounds],
        pagination=PaginationMeta(**pagination(query.page, query.limit, total, len(campgrounds))),
    )


@router.get("/{campground_id}", response_model=CampgroundDetail, dependencies=[Depends(get_current_user)])
def get_campground(
    campground_id: int = Depends(campground_id_param),
    db: Session = Depends(get_db),
):
    """Get a campground with its author and comments (newest first)."""
    campground = (
        db.query(Campground)
        .options(
            joinedload(Campground.author),
            selectinload(Campground.comments).joinedload(Comment.author),
        )
        .filter(Campground.id == campground_id)
        .first()
    )
    if not campground:
        not_found("Campground")
    return CampgroundDetail.model_validate(campground)


@router.post("", response_model=CampgroundResponse, status_code=201)
def create_campground(
    data: CampgroundCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_required_user),
):
    """Create a campground owned by the current user."""
    campground = Campground(
        name=data.name,
        price=data.price,
        image=data.image,
        description=data.description,
        location=data.location,
        author_id=current_user.id,
    )
    db.add(campground)
    db.commit()
    db.refresh(campground)

    api_logger.info("Campground created", campground_id=campground.id, author_id=current_user.id)
    return CampgroundResponse.model_validate(campground)


@router.put("/{campground_id}", response_model=CampgroundResponse)
def update_campground(
    data: CampgroundUpdate,
    current_user: Identity = Depends(get_required_user),
    campground_id: int = Depends(campground_id_param),
    db: Session = Depends(get_db),
):
    """Update a campground (must belong to current user)."""
    campground = get_owned_or_404(db, Campground, campground_id, current_user, "Campground")

    for key, value in data.changes().items():
        setattr(campground, key, value)
    campground.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(campground)

    return CampgroundResponse.model_validate(campground)


@router.delete("/{campground_id}", response_model=SuccessResponse)
def delete_campground(
    current_user: Identity = Depends(get_required_user),
    campground_id: int = Depends(campground_id_param),
    db: Session = Depends(get_db),
):
    """Delete a campground (must belong to current user). Its comments go with it."""
    campground = get_owned_or_404(db, Campground, campground_id, current_user, "Campground")

    db.delete(campground)
    db.commit()

    api_logger.info("Campground deleted", campground_id=campground_id, author_id=current_user.id)
    return deleted("Campground")
