"""
Ratings Service

Maintains the denormalized rating fields on Book:
- average_rating: Mean of all review ratings (0 when there are none)
- total_reviews: Number of reviews

Called after every review create or delete so book listings never have to
aggregate reviews themselves.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookshelf.models import Book, Review


def recalculate_book_rating(db: Session, book_id: str) -> None:
    """
    Recalculate and store a book's rating aggregates.

    Note:
        This function commits the changes to the database.
    """
    stmt = select(
        func.avg(Review.rating),
        func.count(Review.id),
    ).where(Review.book_id == book_id)

    avg_rating, review_count = db.execute(stmt).one()

    book = db.get(Book, book_id)
    if book:
        book.average_rating = round(float(avg_rating), 2) if avg_rating is not None else 0
        book.total_reviews = review_count
        db.commit()
