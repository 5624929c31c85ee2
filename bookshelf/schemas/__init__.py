"""
Pydantic Schemas Package

Request/response models, kept separate from the SQLAlchemy models so the
API controls exactly which fields are exposed (no password hashes, ever).

Schema Naming Convention:
- XxxCreate / XxxRequest: Input from the client
- XxxResponse: Fields returned in API responses
- Envelope / ListEnvelope: {"success": true, "data": ...} wrappers
"""

from bookshelf.schemas.book import BookCreate, BookResponse
from bookshelf.schemas.common import ApiModel, Envelope, ListEnvelope, MessageResponse
from bookshelf.schemas.review import (
    CommentCreate,
    CommentResponse,
    ReviewCreate,
    ReviewResponse,
)
from bookshelf.schemas.user import (
    AuthResponse,
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    RegisterRequest,
    UserPublicResponse,
    UserResponse,
)

__all__ = [
    # Shared
    "ApiModel",
    "Envelope",
    "ListEnvelope",
    "MessageResponse",
    # Users / auth
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdate",
    "PasswordChange",
    "UserResponse",
    "UserPublicResponse",
    "AuthResponse",
    # Books
    "BookCreate",
    "BookResponse",
    # Reviews / comments
    "ReviewCreate",
    "ReviewResponse",
    "CommentCreate",
    "CommentResponse",
]
