"""
Reviews Router

Endpoints:
- GET /books/{book_id}/reviews - List reviews for a book
- POST /books/{book_id}/reviews - Review a book (authenticated)
- GET /reviews/{review_id} - Get a specific review
- DELETE /reviews/{review_id} - Delete a review (author only)
- PUT /reviews/{review_id}/like - Like a review (authenticated)
- DELETE /reviews/{review_id}/like - Remove a like (authenticated)
- GET /reviews/{review_id}/comments - List comments on a review
- POST /reviews/{review_id}/comments - Comment on a review (authenticated)

Business Rules:
- One review per user per book (enforced by database constraint)
- Liking twice or unliking without a like changes nothing
- Creating or deleting a review refreshes the book's rating fields
"""

import logging

from fastapi import APIRouter, status
from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from bookshelf.dependencies import (
    CurrentUser,
    DbSession,
    Pagination,
    get_book_or_404,
    get_review_or_404,
)
from bookshelf.exceptions import Conflict, Forbidden
from bookshelf.models import Comment, Review
from bookshelf.schemas.common import Envelope, ListEnvelope, MessageResponse
from bookshelf.schemas.review import (
    CommentCreate,
    CommentResponse,
    ReviewCreate,
    ReviewResponse,
)
from bookshelf.services.ratings import recalculate_book_rating

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Reviews"],
    responses={404: {"description": "Review or book not found"}},
)


# =============================================================================
# Book Review Endpoints
# =============================================================================
@router.get(
    "/books/{book_id}/reviews",
    response_model=ListEnvelope[ReviewResponse],
    summary="List reviews for a book",
)
def list_book_reviews(
    book_id: str,
    db: DbSession,
    pagination: Pagination,
) -> ListEnvelope[ReviewResponse]:
    get_book_or_404(db, book_id)

    total = db.execute(
        select(func.count()).select_from(Review).where(Review.book_id == book_id)
    ).scalar() or 0

    reviews = db.execute(
        select(Review)
        .options(selectinload(Review.author))
        .where(Review.book_id == book_id)
        .order_by(Review.created_at.desc())
        .offset(pagination.skip)
        .limit(pagination.limit)
    ).scalars().all()

    return ListEnvelope[ReviewResponse](
        count=len(reviews),
        total=total,
        page=pagination.page,
        data=[ReviewResponse.model_validate(r) for r in reviews],
    )


@router.post(
    "/books/{book_id}/reviews",
    response_model=Envelope[ReviewResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Review a book",
    description="One review per book per user. Requires authentication.",
)
def create_review(
    book_id: str,
    body: ReviewCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> Envelope[ReviewResponse]:
    book = get_book_or_404(db, book_id)

    existing = db.execute(
        select(Review.id).where(
            Review.book_id == book.id,
            Review.author_id == current_user.id,
        )
    ).first()
    if existing is not None:
        raise Conflict("You have already reviewed this book")

    review = Review(
        book_id=book.id,
        author_id=current_user.id,
        rating=body.rating,
        review=body.review,
    )
    db.add(review)
    db.commit()

    recalculate_book_rating(db, book.id)
    db.refresh(review)

    logger.info(f"Review {review.id} created for book {book.id} by user {current_user.id}")

    return Envelope[ReviewResponse](data=ReviewResponse.model_validate(review))


# =============================================================================
# Single Review Endpoints
# =============================================================================
@router.get(
    "/reviews/{review_id}",
    response_model=Envelope[ReviewResponse],
    summary="Get a review",
)
def get_review(review_id: str, db: DbSession) -> Envelope[ReviewResponse]:
    review = get_review_or_404(db, review_id)
    return Envelope[ReviewResponse](data=ReviewResponse.model_validate(review))


@router.delete(
    "/reviews/{review_id}",
    response_model=MessageResponse,
    summary="Delete a review",
    description="Only the review's author can delete it.",
)
def delete_review(
    review_id: str,
    db: DbSession,
    current_user: CurrentUser,
) -> MessageResponse:
    review = get_review_or_404(db, review_id)

    if review.author_id != current_user.id:
        raise Forbidden("You can only delete your own reviews")

    book_id = review.book_id
    db.delete(review)
    db.commit()

    recalculate_book_rating(db, book_id)

    logger.info(f"Review {review_id} deleted by user {current_user.id}")

    return MessageResponse(message="Review deleted")


# =============================================================================
# Likes
# =============================================================================
@router.put(
    "/reviews/{review_id}/like",
    response_model=Envelope[ReviewResponse],
    summary="Like a review",
)
def like_review(
    review_id: str,
    db: DbSession,
    current_user: CurrentUser,
) -> Envelope[ReviewResponse]:
    review = get_review_or_404(db, review_id)
    if review.like(current_user):
        db.commit()
        db.refresh(review)
    return Envelope[ReviewResponse](data=ReviewResponse.model_validate(review))


@router.delete(
    "/reviews/{review_id}/like",
    response_model=Envelope[ReviewResponse],
    summary="Remove a like",
)
def unlike_review(
    review_id: str,
    db: DbSession,
    current_user: CurrentUser,
) -> Envelope[ReviewResponse]:
    review = get_review_or_404(db, review_id)
    if review.unlike(current_user):
        db.commit()
        db.refresh(review)
    return Envelope[ReviewResponse](data=ReviewResponse.model_validate(review))


# =============================================================================
# Comments
# =============================================================================
@router.get(
    "/reviews/{review_id}/comments",
    response_model=Envelope[list[CommentResponse]],
    summary="List comments on a review",
)
def list_comments(review_id: str, db: DbSession) -> Envelope[list[CommentResponse]]:
    get_review_or_404(db, review_id)

    comments = db.execute(
        select(Comment)
        .options(selectinload(Comment.author))
        .where(Comment.review_id == review_id)
        .order_by(Comment.created_at)
    ).scalars().all()

    return Envelope[list[CommentResponse]](
        data=[CommentResponse.model_validate(c) for c in comments]
    )


@router.post(
    "/reviews/{review_id}/comments",
    response_model=Envelope[CommentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a review",
)
def create_comment(
    review_id: str,
    body: CommentCreate,
    db: DbSession,
    current_user: CurrentUser,
) -> Envelope[CommentResponse]:
    review = get_review_or_404(db, review_id)

    comment = Comment(
        text=body.text,
        author_id=current_user.id,
        review_id=review.id,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)

    return Envelope[CommentResponse](data=CommentResponse.model_validate(comment))
