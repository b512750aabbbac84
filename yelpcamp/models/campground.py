"""
Campground model, the primary listed resource.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from ..database import Base
from .comment import Comment


class Campground(Base):
    __tablename__ = "campgrounds"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    price = Column(String(20), nullable=False)  # decimal kept as entered, e.g. "9.00"
    image = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(200), nullable=True)
    author_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False, index=True)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc), nullable=False)

    # Relationships
    author = relationship("User", back_populates="campgrounds")
    comments = relationship(
        "Comment",
        back_populates="campground",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=[Comment.created_at.desc(), Comment.id.desc()],
    )
