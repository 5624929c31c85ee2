"""
Security Service

Password hashing and bearer token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib), per-hash random salt
2. Signed, time-limited JWTs (python-jose, HS256)
3. Stateless verification: a pure function of token, secret and clock

Both classes are built once from the Settings object in the application
factory and shared through app.state. Nothing here reads the environment.

Usage:
    hasher = PasswordHasher(rounds=10)
    stored = hasher.hash("SecurePass123")
    hasher.verify("SecurePass123", stored)  # True

    tokens = TokenService(secret="...", expires_in=timedelta(days=7))
    token = tokens.issue(user.id)
    tokens.verify(token)  # {"subject": user.id}
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import UnknownHashError

from bookshelf.config import Settings
from bookshelf.exceptions import InvalidSignature, MalformedToken, TokenExpired

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------------
# Password Hashing
# -------------------------------------------------------------------------
class PasswordHasher:
    """
    Salted, deliberately slow one-way hashing.

    `rounds` is the bcrypt cost factor; the default of 10 keeps a single
    verification in the tens of milliseconds.
    """

    def __init__(self, rounds: int = 10) -> None:
        # - schemes: bcrypt is the only accepted algorithm
        # - deprecated: "auto" flags hashes made with other settings for upgrade
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """
        Hash a plain text password using bcrypt.

        Example:
            >>> PasswordHasher(rounds=4).hash("SecurePass123").startswith("$2b$")
            True
        """
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str | None) -> bool:
        """
        Verify a plain password against a stored hash.

        Uses bcrypt's own constant-time comparison. Never raises for a
        wrong password; a missing or unreadable hash also counts as a
        mismatch.
        """
        if not password_hash:
            return False
        try:
            return self._context.verify(password, password_hash)
        except (UnknownHashError, ValueError):
            logger.warning("Stored password hash could not be parsed")
            return False


# -------------------------------------------------------------------------
# Bearer Tokens
# -------------------------------------------------------------------------
ALGORITHM = "HS256"


class TokenService:
    """
    Issues and verifies signed, self-describing bearer tokens.

    Tokens are never stored server-side. A token stays valid until its
    expiry; there is no revocation list.
    """

    def __init__(self, secret: str, expires_in: timedelta) -> None:
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(secret=settings.jwt_secret, expires_in=settings.jwt_expire)

    def issue(self, user_id: str) -> str:
        """
        Create a token for `user_id`.

        Claims:
        - sub: the user id
        - iat: issuance time
        - exp: issuance time + the configured lifetime

        Example:
            >>> token = tokens.issue("65f1c0ffee0000000000abcd")
            >>> token.count(".") == 2  # JWT format: header.payload.signature
            True
        """
        now = datetime.now(UTC)
        claims = {
            "sub": user_id,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> dict:
        """
        Decode and validate a token.

        Returns:
            {"subject": <user id>}

        Raises:
            MalformedToken: The token cannot be decoded at all
            InvalidSignature: The signature does not match the secret
            TokenExpired: The expiry time has passed
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise MalformedToken(str(e)) from e

        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError as e:
            raise TokenExpired(str(e)) from e
        except JWTError as e:
            raise InvalidSignature(str(e)) from e

        subject = payload.get("sub")
        if not subject:
            raise MalformedToken("Token has no subject")

        return {"subject": subject}
