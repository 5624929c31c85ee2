"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers with
Depends(). This module provides:
- Database sessions (per-request)
- The shared PasswordHasher and TokenService built by the app factory
- Pagination parameters
- The auth gate (get_current_user) for protected routes

Auth Gate
=========
Every protected request goes through the same steps:

    no token → token present → token verified → identity resolved → authorized

and any step can end in a 401 instead:
1. Extract: the Authorization header must read exactly "Bearer <token>"
   (case-sensitive scheme, one space). Otherwise: not authorized.
2. Verify: TokenService.verify(). Malformed, badly signed and expired
   tokens all produce the same "not authorized" response.
3. Resolve: load the user named by the token's subject. A token for a
   deleted account is rejected with "User no longer exists", although the
   token itself stays cryptographically valid until it expires.
4. Attach: the freshly loaded User (not the raw claims) is stored on
   request.state.user and returned to the handler.

The gate knows nothing about roles; it only answers "which user is this".
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, Query, Request
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from bookshelf.database import get_db
from bookshelf.exceptions import NotAuthorized, NotFound, TokenError
from bookshelf.models import Book, Review, User
from bookshelf.services.security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

# =============================================================================
# Type Aliases with Annotated
# =============================================================================
# Instead of writing:
#   def get_books(db: Session = Depends(get_db)):
# You can write:
#   def get_books(db: DbSession):

DbSession = Annotated[Session, Depends(get_db)]


# =============================================================================
# Shared Services
# =============================================================================
def get_password_hasher(request: Request) -> PasswordHasher:
    """The PasswordHasher created in create_app()."""
    return request.app.state.password_hasher


def get_token_service(request: Request) -> TokenService:
    """The TokenService created in create_app()."""
    return request.app.state.token_service


Hasher = Annotated[PasswordHasher, Depends(get_password_hasher)]
Tokens = Annotated[TokenService, Depends(get_token_service)]


# =============================================================================
# Pagination Parameters
# =============================================================================
class PaginationParams:
    """
    Common pagination parameters for list endpoints.

        GET /api/books?page=2&limit=20
    """

    def __init__(
        self,
        page: int = Query(
            default=1,
            ge=1,
            description="Page number (1-indexed)",
        ),
        limit: int = Query(
            default=10,
            ge=1,
            le=100,
            description="Number of items per page (max 100)",
        ),
    ) -> None:
        self.page = page
        self.limit = limit

    @property
    def skip(self) -> int:
        """Number of records to skip: page 1 → 0, page 2 → limit, ..."""
        return (self.page - 1) * self.limit


Pagination = Annotated[PaginationParams, Depends()]


# =============================================================================
# Bearer Token Authentication
# =============================================================================
def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Return the token from an "Authorization: Bearer <token>" header value.

    Returns None when the header is absent, uses another scheme (or a
    different capitalisation of "Bearer") or carries no token.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):]
    return token or None


def get_current_user(
    request: Request,
    db: DbSession,
    tokens: Tokens,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """
    Resolve the authenticated user for a protected route.

    Raises:
        NotAuthorized: 401 if the token is missing, invalid or expired,
            or if its user no longer exists
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise NotAuthorized()

    try:
        claims = tokens.verify(token)
    except TokenError as e:
        logger.warning(f"Token rejected: {type(e).__name__}")
        raise NotAuthorized() from e

    user = db.get(User, claims["subject"])
    if user is None:
        logger.warning(f"Token subject {claims['subject']} no longer exists")
        raise NotAuthorized("User no longer exists")

    request.state.user = user
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


# =============================================================================
# Lookup Helpers
# =============================================================================
def get_book_or_404(db: Session, book_id: str) -> Book:
    """Get a book by ID or raise 404."""
    book = db.get(Book, book_id)
    if book is None:
        raise NotFound("Book not found")
    return book


def get_review_or_404(db: Session, review_id: str) -> Review:
    """Get a review by ID with its author loaded, or raise 404."""
    stmt = (
        select(Review)
        .options(selectinload(Review.author))
        .where(Review.id == review_id)
    )
    review = db.execute(stmt).scalar_one_or_none()
    if review is None:
        raise NotFound("Review not found")
    return review
