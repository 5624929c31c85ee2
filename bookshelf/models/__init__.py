"""
SQLAlchemy Models Package

Model Relationships:
- User -> Review: One-to-Many (a user writes many reviews)
- Book -> Review: One-to-Many (a book receives many reviews)
- Review <-> User: Many-to-Many through review_likes
- Review -> Comment: One-to-Many

Import all models here so that Alembic and Base.metadata.create_all()
see every table.
"""

from bookshelf.models.user import User
from bookshelf.models.book import Book
from bookshelf.models.review import Review, review_likes
from bookshelf.models.comment import Comment

__all__ = [
    "User",
    "Book",
    "Review",
    "review_likes",
    "Comment",
]
