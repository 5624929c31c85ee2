"""
Application Exceptions

Every error a handler wants the client to see is raised as a BookshelfError
subclass. The exception handlers registered in main.py turn them into the
standard failure envelope:

    {"success": false, "message": "..."}

Token verification has its own small hierarchy (TokenError). Those never
reach the client directly: the auth gate collapses all of them into a
single NotAuthorized response.
"""

from fastapi import status


class BookshelfError(Exception):
    """Base class for errors rendered as a JSON failure envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationFailed(BookshelfError):
    """A required field is missing or a constraint is violated."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class UserAlreadyExists(BookshelfError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists"


class InvalidCredentials(BookshelfError):
    """Wrong password or unknown email. Deliberately indistinguishable."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid credentials"


class Conflict(BookshelfError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Resource already exists"


class NotAuthorized(BookshelfError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authorized to access this route"


class Forbidden(BookshelfError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Not allowed to modify this resource"


class NotFound(BookshelfError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Resource not found"


# =============================================================================
# Token verification errors
# =============================================================================
class TokenError(Exception):
    """Base class for bearer token verification failures."""


class MalformedToken(TokenError):
    """The token could not be decoded at all."""


class InvalidSignature(TokenError):
    """The token decoded but its signature (or claims) did not check out."""


class TokenExpired(TokenError):
    """The token was valid but its expiry time has passed."""
