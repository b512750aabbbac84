"""
Comment routes. Every endpoint requires a logged-in user; changes are owner-only.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session, joinedload

from ..auth import Identity, get_required_user
from ..database import get_db
from ..models.campground import Campground
from ..models.comment import Comment
from ..permissions import get_or_404, get_owned_or_404, parse_id
from ..responses import deleted, not_found
from ..schemas import CommentResponse, SuccessResponse
from ..validation import CommentCreate, CommentUpdate

router = APIRouter(prefix="/api/comments", tags=["comments"])


def comment_id_param(comment_id: str) -> int:
    return parse_id(comment_id, "Comment")


@router.post("", response_model=CommentResponse, status_code=201)
def create_comment(
    data: CommentCreate,
    db: Session = Depends(get_db),
    current_user: Identity = Depends(get_required_user),
):
    """Post a comment on an existing campground."""
    get_or_404(db, Campground, data.campground_id, "Campground")

    comment = Comment(
        text=data.text,
        campground_id=data.campground_id,
        author_id=current_user.id,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    return CommentResponse.model_validate(comment)


@router.get("/{comment_id}", response_model=CommentResponse)
def get_comment(
    current_user: Identity = Depends(get_required_user),
    comment_id: int = Depends(comment_id_param),
    db: Session = Depends(get_db),
):
    comment = (
        db.query(Comment)
        .options(joinedload(Comment.author))
        .filter(Comment.id == comment_id)
        .first()
    )
    if not comment:
        not_found("Comment")
    return CommentResponse.model_validate(comment)


@router.put("/{comment_id}", response_model=CommentResponse)
def update_comment(
    data: CommentUpdate,
    current_user: Identity = Depends(get_required_user),
    comment_id: int = Depends(comment_id_param),
    db: Session = Depends(get_db),
):
    """Edit a comment's text (must belong to current user)."""
    comment = get_owned_or_404(
        db, Comment, comment_id, current_user, "Comment",
        forbidden_message="You do not have permission to edit this comment",
    )

    comment.text = data.text
    comment.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(comment)

    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", response_model=SuccessResponse)
def delete_comment(
    current_user: Identity = Depends(get_required_user),
    comment_id: int = Depends(comment_id_param),
    db: Session = Depends(get_db),
):
    """Delete a comment (must belong to current user)."""
    comment = get_owned_or_404(
        db, Comment, comment_id, current_user, "Comment",
        forbidden_message="You do not have permission to delete this comment",
    )

    db.delete(comment)
    db.commit()
    return deleted("Comment")
