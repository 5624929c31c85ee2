"""
Authentication Router

Endpoints:
- POST /auth/register - Create an account, returns a token
- POST /auth/login - Exchange email + password for a token
- GET /auth/me - The account behind the bearer token

Security:
=========
- Passwords are hashed with bcrypt before storage and never logged
- Login failures use one message for unknown email and wrong password
- Tokens are stateless JWTs; clients send them as "Authorization: Bearer <token>"

Register answers 200 rather than 201 because existing clients expect the
same status and envelope from register and login.
"""

import logging

from fastapi import APIRouter, Request, status

from bookshelf.config import get_settings
from bookshelf.dependencies import CurrentUser, DbSession, Hasher, Tokens
from bookshelf.models.user import User
from bookshelf.schemas.common import Envelope
from bookshelf.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from bookshelf.services import accounts
from bookshelf.services.rate_limiter import limiter
from bookshelf.services.security import TokenService

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        400: {"description": "Validation failed, duplicate user or invalid credentials"},
        401: {"description": "Missing, invalid or stale token"},
    },
)


def token_response(tokens: TokenService, user: User) -> AuthResponse:
    """Issue a token for `user` and wrap it with the user's public data."""
    return AuthResponse(
        token=tokens.issue(user.id),
        user=UserResponse.model_validate(user),
    )


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_200_OK,
    summary="Register a new user",
    description="""
    Create a new account and receive a bearer token.

    **Requirements:**
    - username: 2-20 characters, unique
    - email: valid address, unique
    - password: at least 2 characters
    """,
)
@limiter.limit(settings.rate_limit_auth)
def register(
    request: Request,
    db: DbSession,
    hasher: Hasher,
    tokens: Tokens,
    body: RegisterRequest | None = None,
) -> AuthResponse:
    """
    1. Validates username, email and password
    2. Rejects a username or email that is already taken
    3. Hashes the password and creates the user
    4. Returns a token and the user (without password)

    A missing body is treated as an empty one so it gets the same
    field messages.
    """
    body = body or RegisterRequest()
    user = accounts.register_user(
        db,
        hasher,
        username=body.username,
        email=body.email,
        password=body.password,
    )
    return token_response(tokens, user)


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive a bearer token.

    **Usage:**
    Include the token in the Authorization header:
    ```
    Authorization: Bearer <token>
    ```
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    db: DbSession,
    hasher: Hasher,
    tokens: Tokens,
    body: LoginRequest | None = None,
) -> AuthResponse:
    body = body or LoginRequest()
    user = accounts.authenticate_user(db, hasher, email=body.email, password=body.password)
    return token_response(tokens, user)


# -------------------------------------------------------------------------
# Current User Endpoint
# -------------------------------------------------------------------------
@router.get(
    "/me",
    response_model=Envelope[UserResponse],
    summary="Get current user",
    description="Get the account identified by the bearer token.",
)
def get_me(
    current_user: CurrentUser,
    db: DbSession,
) -> Envelope[UserResponse]:
    """Re-read the user so the response reflects the stored record."""
    user = accounts.get_user(db, current_user.id)
    return Envelope[UserResponse](data=UserResponse.model_validate(user))
