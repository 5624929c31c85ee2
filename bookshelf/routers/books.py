"""
Books Router

Endpoints:
- GET /books - Paginated catalog, newest first, optional ?genre= filter
- GET /books/{book_id} - A single book
- POST /books - Contribute a book (authenticated)

Business Rules:
- Title and author are required
- ISBN is optional but unique when given
"""

import logging

from fastapi import APIRouter, Query, status
from sqlalchemy import String, cast, func, select

from bookshelf.dependencies import CurrentUser, DbSession, Pagination, get_book_or_404
from bookshelf.exceptions import Conflict, ValidationFailed
from bookshelf.models import Book
from bookshelf.models.book import DEFAULT_COVER_IMAGE
from bookshelf.schemas.book import BookCreate, BookResponse
from bookshelf.schemas.common import Envelope, ListEnvelope

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={404: {"description": "Book not found"}},
)


@router.get(
    "",
    response_model=ListEnvelope[BookResponse],
    summary="List books",
)
def list_books(
    db: DbSession,
    pagination: Pagination,
    genre: str | None = Query(
        default=None,
        min_length=1,
        max_length=100,
        description="Only books tagged with this genre (exact match)",
    ),
) -> ListEnvelope[BookResponse]:
    stmt = select(Book)
    if genre:
        # Genres are a JSON array; match the quoted element in its text form
        stmt = stmt.where(cast(Book.genres, String).contains(f'"{genre}"', autoescape=True))

    total = db.execute(select(func.count()).select_from(stmt.subquery())).scalar() or 0

    books = db.execute(
        stmt.order_by(Book.created_at.desc())
        .offset(pagination.skip)
        .limit(pagination.limit)
    ).scalars().all()

    return ListEnvelope[BookResponse](
        count=len(books),
        total=total,
        page=pagination.page,
        data=[BookResponse.model_validate(b) for b in books],
    )


@router.get(
    "/{book_id}",
    response_model=Envelope[BookResponse],
    summary="Get a book",
)
def get_book(book_id: str, db: DbSession) -> Envelope[BookResponse]:
    book = get_book_or_404(db, book_id)
    return Envelope[BookResponse](data=BookResponse.model_validate(book))


@router.post(
    "",
    response_model=Envelope[BookResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add a book",
    description="Contribute a catalog entry. Requires authentication.",
)
def create_book(
    body: BookCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> Envelope[BookResponse]:
    if not body.title or not body.author:
        raise ValidationFailed("title", "Title and author are required")

    if body.isbn:
        existing = db.execute(select(Book.id).where(Book.isbn == body.isbn)).first()
        if existing is not None:
            raise Conflict("A book with this ISBN already exists")

    book = Book(
        title=body.title,
        author=body.author,
        isbn=body.isbn,
        cover_image=body.cover_image or DEFAULT_COVER_IMAGE,
        description=body.description,
        published_date=body.published_date,
        genres=body.genres,
        added_by_id=current_user.id,
    )
    db.add(book)
    db.commit()
    db.refresh(book)

    logger.info(f"Book {book.id} added by user {current_user.id}")

    return Envelope[BookResponse](data=BookResponse.model_validate(book))
