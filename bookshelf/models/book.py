"""
Book Model

Catalog entries that users add and review.

The rating fields (average_rating, total_reviews) are denormalized and
kept in sync by services/ratings.py whenever reviews change, so book
listings do not need to aggregate reviews on every request.
"""

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base, generate_id

if TYPE_CHECKING:
    from bookshelf.models.review import Review
    from bookshelf.models.user import User

DEFAULT_COVER_IMAGE = "default-coverImage.jpg"


class Book(Base):
    """
    Book model.

    Table: books

    Fields:
    - title, author: Required, trimmed, at most 100 characters
    - isbn: Optional, unique when present (NULLs never collide)
    - genres: List of genre names stored as JSON
    - added_by: The user who contributed the entry

    Example:
        book = Book(
            title="1984",
            author="George Orwell",
            isbn="9780451524935",
            genres=["Dystopian", "Classics"],
            added_by_id=user.id,
        )
    """

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_id,
    )

    title: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )

    author: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        index=True,
    )

    isbn: Mapped[str | None] = mapped_column(
        String(20),
        unique=True,
        nullable=True,
        comment="ISBN-10 or ISBN-13; unique when present"
    )

    cover_image: Mapped[str] = mapped_column(
        String(500),
        default=DEFAULT_COVER_IMAGE,
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    published_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    genres: Mapped[list[str]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )

    added_by_id: Mapped[str] = mapped_column(
        String(24),
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )

    average_rating: Mapped[float] = mapped_column(
        Float,
        default=0,
        nullable=False,
    )

    total_reviews: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    added_by: Mapped["User"] = relationship("User")
    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="book",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        CheckConstraint(
            "average_rating >= 0 AND average_rating <= 5",
            name="ck_book_average_rating_range",
        ),
    )

    def __repr__(self) -> str:
        return f"<Book(id='{self.id}', title='{self.title}')>"
