"""
Accounts Service

Registration, login and credential changes.

Validation is an explicit step: validate_registration() checks the raw
input field by field and raises ValidationFailed for the first violated
constraint, before anything touches the database.

Registration is check-then-create. The pre-check gives the friendly
"User already exists" message; the unique constraints on users.username
and users.email are what actually stop a concurrent duplicate. A request
that loses that race fails with an IntegrityError, which the application
reports as a generic 500.
"""

import logging
import re
from dataclasses import dataclass

from sqlalchemy import or_, select
from sqlalchemy.orm import Session, undefer

from bookshelf.exceptions import (
    InvalidCredentials,
    NotFound,
    UserAlreadyExists,
    ValidationFailed,
)
from bookshelf.models.user import User
from bookshelf.services.security import PasswordHasher

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 2
USERNAME_MAX_LENGTH = 20
EMAIL_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 2
BIO_MAX_LENGTH = 100
PROFILE_IMAGE_MAX_LENGTH = 500

EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")

LOGIN_FIELDS_MISSING = "Please provide an email and password to login"


@dataclass(frozen=True)
class Registration:
    """Registration input that passed validation."""

    username: str
    email: str
    password: str


# =============================================================================
# Validation
# =============================================================================
def validate_username(username: str | None) -> str:
    username = (username or "").strip()
    if not username:
        raise ValidationFailed("username", "Please provide a username")
    if len(username) < USERNAME_MIN_LENGTH:
        raise ValidationFailed(
            "username",
            f"Username must be at least {USERNAME_MIN_LENGTH} characters long",
        )
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationFailed(
            "username",
            f"Username must be at most {USERNAME_MAX_LENGTH} characters long",
        )
    return username


def validate_email(email: str | None) -> str:
    email = (email or "").strip()
    if not email:
        raise ValidationFailed("email", "Please provide an email")
    if len(email) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(email):
        raise ValidationFailed("email", "Please provide a valid email")
    return email


def validate_password(password: str | None) -> str:
    if not password:
        raise ValidationFailed("password", "Please provide a password")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationFailed(
            "password",
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long",
        )
    return password


def validate_bio(bio: str | None) -> str | None:
    if bio is not None and len(bio) > BIO_MAX_LENGTH:
        raise ValidationFailed(
            "bio", f"Bio must be at most {BIO_MAX_LENGTH} characters long"
        )
    return bio


def validate_registration(
    username: str | None,
    email: str | None,
    password: str | None,
) -> Registration:
    """
    Validate raw registration input.

    Fields are checked in order (username, email, password) and the first
    violation is raised.

    Raises:
        ValidationFailed: With the offending field and a readable message
    """
    return Registration(
        username=validate_username(username),
        email=validate_email(email),
        password=validate_password(password),
    )


# =============================================================================
# Operations
# =============================================================================
def register_user(
    db: Session,
    hasher: PasswordHasher,
    username: str | None,
    email: str | None,
    password: str | None,
) -> User:
    """
    Validate input, reject duplicates and create a user.

    Raises:
        ValidationFailed: Input is missing or malformed
        UserAlreadyExists: The username or email is taken
        sqlalchemy.exc.IntegrityError: A concurrent registration won the race
    """
    data = validate_registration(username, email, password)

    stmt = select(User).where(
        or_(User.email == data.email, User.username == data.username)
    )
    if db.execute(stmt).first() is not None:
        raise UserAlreadyExists()

    user = User.with_password(
        hasher,
        username=data.username,
        email=data.email,
        password=data.password,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info(f"New user registered: {user.id}")
    return user


def authenticate_user(
    db: Session,
    hasher: PasswordHasher,
    email: str | None,
    password: str | None,
) -> User:
    """
    Look up a user by email and check the password.

    Unknown email and wrong password raise the same InvalidCredentials
    error so the response does not reveal which one was wrong.
    """
    if not email or not password:
        raise ValidationFailed("email", LOGIN_FIELDS_MISSING)

    # The hash column is deferred; this is the one query that needs it
    stmt = select(User).options(undefer(User.password_hash)).where(User.email == email)
    user = db.execute(stmt).scalar_one_or_none()

    if user is None:
        logger.warning("Login failed: unknown email")
        raise InvalidCredentials()

    if not user.check_password(hasher, password):
        logger.warning(f"Login failed: wrong password for user {user.id}")
        raise InvalidCredentials()

    logger.info(f"User logged in: {user.id}")
    return user


def get_user(db: Session, user_id: str) -> User:
    """
    Fetch a user by id or raise NotFound.

    Always reads the row, even when the user is already in the session's
    identity map, so callers see the stored record.
    """
    user = db.get(User, user_id, populate_existing=True)
    if user is None:
        raise NotFound("User not found")
    return user


def update_profile(
    db: Session,
    user: User,
    bio: str | None = None,
    profile_image: str | None = None,
) -> User:
    """
    Update display metadata. The stored password hash is not touched.
    """
    if bio is not None:
        user.bio = validate_bio(bio)
    if profile_image is not None:
        profile_image = profile_image.strip()
        if not profile_image or len(profile_image) > PROFILE_IMAGE_MAX_LENGTH:
            raise ValidationFailed("profileImage", "Please provide a valid profile image")
        user.profile_image = profile_image

    db.commit()
    db.refresh(user)
    return user


def change_password(
    db: Session,
    hasher: PasswordHasher,
    user: User,
    current_password: str | None,
    new_password: str | None,
) -> User:
    """
    Replace a user's password after checking the current one.

    Raises:
        InvalidCredentials: The current password does not match
        ValidationFailed: The new password violates the password rules
    """
    if not current_password or not user.check_password(hasher, current_password):
        raise InvalidCredentials()

    user.set_password(hasher, validate_password(new_password))
    db.commit()
    db.refresh(user)

    logger.info(f"Password changed for user {user.id}")
    return user
