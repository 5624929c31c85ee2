"""
User Pydantic Schemas

Schemas:
- RegisterRequest / LoginRequest: Raw credentials from the client
- ProfileUpdate / PasswordChange: Account changes for the current user
- UserResponse: Account data returned to its owner
- UserPublicResponse: Profile visible to other users
- AuthResponse: {success, token, user} returned by register and login

Request fields are all optional on purpose. Presence and format checks
happen in services/accounts.py so that every missing-field case produces
the same 400 message regardless of how the body was malformed.

SECURITY: No response schema has a password or hash field. Serializing
through these schemas is what keeps credentials out of every payload.
"""

from datetime import datetime

from pydantic import ConfigDict, Field

from bookshelf.schemas.common import ApiModel


class RegisterRequest(ApiModel):
    username: str | None = Field(default=None, examples=["bookworm"])
    email: str | None = Field(default=None, examples=["reader@example.com"])
    password: str | None = Field(default=None, examples=["SecurePass123"])


class LoginRequest(ApiModel):
    email: str | None = Field(default=None, examples=["reader@example.com"])
    password: str | None = Field(default=None, examples=["SecurePass123"])


class ProfileUpdate(ApiModel):
    """Partial profile update. Omitted fields are left unchanged."""

    bio: str | None = Field(default=None, description="At most 100 characters")
    profile_image: str | None = Field(default=None, description="Image URL or file name")


class PasswordChange(ApiModel):
    current_password: str | None = None
    new_password: str | None = None


class UserPublicResponse(ApiModel):
    """Public profile: no email."""

    id: str
    username: str
    profile_image: str
    bio: str | None = None
    created_at: datetime


class UserResponse(UserPublicResponse):
    """
    Full account data for the account owner.

    SECURITY: Never includes the password hash.
    """

    email: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "65f1c0ffee0000000000abcd",
                "username": "bookworm",
                "email": "reader@example.com",
                "profileImage": "default-profile.jpg",
                "bio": None,
                "createdAt": "2025-04-01T10:30:00Z",
            }
        },
    )


class AuthResponse(ApiModel):
    """Returned by register and login."""

    success: bool = True
    token: str = Field(..., description="Bearer token for the Authorization header")
    user: UserResponse
