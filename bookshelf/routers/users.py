"""
Users Router

User profile endpoints.

Endpoints:
- GET /users/me - Current user's profile (same as /auth/me)
- PATCH /users/me - Update bio and/or profile image
- PUT /users/me/password - Change password
- GET /users/{user_id} - Public user profile

Business Rules:
- Users can only update their own profile
- Profile updates never re-hash the stored password
- Password change requires the current password
"""

from fastapi import APIRouter

from bookshelf.dependencies import CurrentUser, DbSession, Hasher
from bookshelf.schemas.common import Envelope, MessageResponse
from bookshelf.schemas.user import (
    PasswordChange,
    ProfileUpdate,
    UserPublicResponse,
    UserResponse,
)
from bookshelf.services import accounts

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={
        401: {"description": "Not authenticated"},
        404: {"description": "User not found"},
    },
)


# Must be registered before /{user_id} so "me" is not taken as an id
@router.get(
    "/me",
    response_model=Envelope[UserResponse],
    summary="Get current user profile",
)
def get_current_user_profile(current_user: CurrentUser) -> Envelope[UserResponse]:
    return Envelope[UserResponse](data=UserResponse.model_validate(current_user))


@router.patch(
    "/me",
    response_model=Envelope[UserResponse],
    summary="Update current user profile",
    description="Update bio and/or profileImage. Omitted fields are unchanged.",
)
def update_current_user_profile(
    body: ProfileUpdate,
    db: DbSession,
    current_user: CurrentUser,
) -> Envelope[UserResponse]:
    user = accounts.update_profile(
        db,
        current_user,
        bio=body.bio,
        profile_image=body.profile_image,
    )
    return Envelope[UserResponse](data=UserResponse.model_validate(user))


@router.put(
    "/me/password",
    response_model=MessageResponse,
    summary="Change password",
)
def change_password(
    body: PasswordChange,
    db: DbSession,
    hasher: Hasher,
    current_user: CurrentUser,
) -> MessageResponse:
    """
    Existing tokens stay valid after a password change; they expire on
    their own schedule.
    """
    accounts.change_password(
        db,
        hasher,
        current_user,
        current_password=body.current_password,
        new_password=body.new_password,
    )
    return MessageResponse(message="Password updated")


@router.get(
    "/{user_id}",
    response_model=Envelope[UserPublicResponse],
    summary="Get a public user profile",
)
def get_user_profile(user_id: str, db: DbSession) -> Envelope[UserPublicResponse]:
    user = accounts.get_user(db, user_id)
    return Envelope[UserPublicResponse](data=UserPublicResponse.model_validate(user))
