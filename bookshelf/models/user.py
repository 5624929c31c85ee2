"""
User Model

Represents an account on the BookShelf platform: identity plus the
credential (a salted bcrypt hash) used to log in.

Password handling is explicit, there is no save hook:
- User.with_password(...) builds a new user from a plaintext password and
  hashes it immediately.
- user.set_password(...) replaces the hash when the password changes.
- A user loaded from the database keeps its stored hash as-is. Updating
  the bio or the profile image never touches it.

The hash column is deferred: ordinary queries do not load it. Login is the
one operation that asks for it explicitly (see services/accounts.py).
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookshelf.database import Base, generate_id

if TYPE_CHECKING:
    from bookshelf.models.review import Review
    from bookshelf.services.security import PasswordHasher

DEFAULT_PROFILE_IMAGE = "default-profile.jpg"


class User(Base):
    """
    User model representing registered users.

    Table: users

    Indexes:
    - username: Unique
    - email: Unique (used for login lookups)
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(24),
        primary_key=True,
        default=generate_id,
    )

    username: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        index=True,
        nullable=False,
        comment="Public handle, unique across users"
    )

    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Login identifier, unique across users"
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        deferred=True,
        comment="bcrypt hash; never the plaintext"
    )

    profile_image: Mapped[str] = mapped_column(
        String(500),
        default=DEFAULT_PROFILE_IMAGE,
        nullable=False,
    )

    bio: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    reviews: Mapped[list["Review"]] = relationship(
        "Review",
        back_populates="author",
        cascade="all, delete-orphan",
    )

    # -------------------------------------------------------------------------
    # Credential handling
    # -------------------------------------------------------------------------
    @classmethod
    def with_password(
        cls,
        hasher: "PasswordHasher",
        *,
        username: str,
        email: str,
        password: str,
        **profile,
    ) -> "User":
        """
        Build a new, unsaved user from a plaintext password.

        The plaintext is hashed before the object exists, so a User can
        never reach the session holding a plaintext password.
        """
        return cls(
            username=username,
            email=email,
            password_hash=hasher.hash(password),
            **profile,
        )

    def set_password(self, hasher: "PasswordHasher", password: str) -> None:
        """Replace the stored hash with the hash of a new plaintext password."""
        self.password_hash = hasher.hash(password)

    def check_password(self, hasher: "PasswordHasher", password: str) -> bool:
        """Return True if `password` matches the stored hash."""
        return hasher.verify(password, self.password_hash)

    def __repr__(self) -> str:
        return f"User(id='{self.id}', username='{self.username}')"
