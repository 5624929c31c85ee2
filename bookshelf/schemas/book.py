"""
Book Pydantic Schemas

Schemas:
- BookCreate: User-contributed catalog entry
- BookResponse: Book data for API responses

Title and author are optional at the schema level so that a missing value
gets the endpoint's own "Title and author are required" message rather
than a generic field error.
"""

from datetime import date, datetime

from pydantic import Field, field_validator

from bookshelf.schemas.common import ApiModel

TITLE_MAX_LENGTH = 100
AUTHOR_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000


class BookCreate(ApiModel):
    title: str | None = Field(default=None, examples=["1984"])
    author: str | None = Field(default=None, examples=["George Orwell"])
    isbn: str | None = Field(default=None, max_length=20, examples=["9780451524935"])
    cover_image: str | None = Field(default=None, max_length=500)
    description: str | None = None
    published_date: date | None = None
    genres: list[str] = Field(default_factory=list, examples=[["Dystopian", "Classics"]])

    @field_validator("title", "author", "isbn", "cover_image")
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("title")
    @classmethod
    def title_length(cls, v: str | None) -> str | None:
        if v is not None and len(v) > TITLE_MAX_LENGTH:
            raise ValueError(f"Title must be at most {TITLE_MAX_LENGTH} characters long")
        return v

    @field_validator("author")
    @classmethod
    def author_length(cls, v: str | None) -> str | None:
        if v is not None and len(v) > AUTHOR_MAX_LENGTH:
            raise ValueError(
                f"Author name must be at most {AUTHOR_MAX_LENGTH} characters long"
            )
        return v

    @field_validator("description")
    @classmethod
    def description_length(cls, v: str | None) -> str | None:
        if v is not None and len(v) > DESCRIPTION_MAX_LENGTH:
            raise ValueError(
                f"Book description must be at most {DESCRIPTION_MAX_LENGTH} characters long"
            )
        return v

    @field_validator("genres")
    @classmethod
    def clean_genres(cls, v: list[str]) -> list[str]:
        """Trim each genre, drop blanks and repeats, keep the order given."""
        cleaned: list[str] = []
        for genre in v:
            genre = genre.strip()
            if genre and genre not in cleaned:
                cleaned.append(genre)
        return cleaned


class BookResponse(ApiModel):
    id: str
    title: str
    author: str
    isbn: str | None = None
    cover_image: str
    description: str | None = None
    published_date: date | None = None
    genres: list[str]
    added_by_id: str = Field(..., alias="addedBy")
    average_rating: float
    total_reviews: int
    created_at: datetime
