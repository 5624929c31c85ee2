"""
Review and Comment Pydantic Schemas

Schemas:
- ReviewCreate: Rating (1-5) and optional text
- ReviewResponse: Review with its author's public profile and like count
- CommentCreate / CommentResponse: Replies to a review
"""

from datetime import datetime

from pydantic import AliasChoices, Field, field_validator

from bookshelf.schemas.common import ApiModel
from bookshelf.schemas.user import UserPublicResponse

REVIEW_MAX_LENGTH = 500
COMMENT_MAX_LENGTH = 200


class ReviewCreate(ApiModel):
    rating: int = Field(
        ...,
        ge=1,
        le=5,
        description="Rating from 1 to 5 stars",
        examples=[4, 5],
    )
    review: str | None = Field(
        default=None,
        description="Review text, at most 500 characters",
        examples=["Couldn't put it down."],
    )

    @field_validator("review")
    @classmethod
    def review_length(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if len(v) > REVIEW_MAX_LENGTH:
            raise ValueError(f"Review must be at most {REVIEW_MAX_LENGTH} characters long")
        return v or None


class ReviewResponse(ApiModel):
    id: str
    book_id: str = Field(
        ...,
        validation_alias=AliasChoices("book_id", "book"),
        serialization_alias="book",
    )
    author: UserPublicResponse
    rating: int
    review: str | None = None
    likes_count: int
    created_at: datetime
    updated_at: datetime


class CommentCreate(ApiModel):
    text: str | None = Field(default=None, validate_default=True)

    @field_validator("text")
    @classmethod
    def text_required(cls, v: str | None) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("A comment requires text")
        if len(v) > COMMENT_MAX_LENGTH:
            raise ValueError(f"Comment must be at most {COMMENT_MAX_LENGTH} characters long")
        return v


class CommentResponse(ApiModel):
    id: str
    text: str
    review_id: str = Field(
        ...,
        validation_alias=AliasChoices("review_id", "review"),
        serialization_alias="review",
    )
    author: UserPublicResponse
    created_at: datetime
