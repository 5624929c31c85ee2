"""
Review Model

A user's rating and short write-up of a book, plus the set of users who
liked it.

Business Rules:
- One review per user per book (unique constraint)
- Rating must be 1-5
- likes_count always equals the number of rows in review_likes for the
  review; like() and unlike() are the only code paths that change either
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base, generate_id

if TYPE_CHECKING:
    from bookshelf.models.book import Book
    from bookshelf.models.comment import Comment
    from bookshelf.models.user import User


review_likes = Table(
    "review_likes",
    Base.metadata,
    Column(
        "review_id",
        String(24),
        ForeignKey("reviews.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        String(24),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    comment="Which users liked which reviews",
)


class Review(Base):
    """
    Review model for book reviews.

    Attributes:
        id: Primary key
        author_id: The reviewing user
        book_id: The reviewed book
        rating: 1-5 star rating
        review: Optional text, at most 500 characters
        likes: Users who liked the review
        likes_count: Denormalized len(likes)
    """

    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_id,
    )

    author_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    book_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("books.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Rating from 1-5 stars",
    )
    review: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )

    likes_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
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

    # Relationships
    author: Mapped["User"] = relationship("User", back_populates="reviews")
    book: Mapped["Book"] = relationship("Book", back_populates="reviews")
    likes: Mapped[list["User"]] = relationship("User", secondary=review_likes)
    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="review",
        cascade="all, delete-orphan",
        order_by="Comment.created_at",
    )

    __table_args__ = (
        UniqueConstraint("book_id", "author_id", name="uq_review_book_author"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_review_rating_range"),
    )

    def like(self, user: "User") -> bool:
        """Add a like from `user`. Returns False if it was already there."""
        if user in self.likes:
            return False
        self.likes.append(user)
        self.likes_count = len(self.likes)
        return True

    def unlike(self, user: "User") -> bool:
        """Remove `user`'s like. Returns False if there was none."""
        if user not in self.likes:
            return False
        self.likes.remove(user)
        self.likes_count = len(self.likes)
        return True

    def __repr__(self) -> str:
        return f"<Review(id='{self.id}', book_id='{self.book_id}', rating={self.rating})>"
