"""
Comment Model

Short replies attached to a review.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base, generate_id

if TYPE_CHECKING:
    from bookshelf.models.review import Review
    from bookshelf.models.user import User


class Comment(Base):
    """Comment on a review. Text is required and at most 200 characters."""

    __tablename__ = "comments"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_id,
    )
    text: Mapped[str] = mapped_column(String(200), nullable=False)

    author_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    review_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("reviews.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    author: Mapped["User"] = relationship("User")
    review: Mapped["Review"] = relationship("Review", back_populates="comments")

    def __repr__(self) -> str:
        return f"<Comment(id='{self.id}', review_id='{self.review_id}')>"
