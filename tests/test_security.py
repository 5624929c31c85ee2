"""
Tests for the Security Service

- PasswordHasher: salted hashing and verification
- TokenService: issuing and verifying bearer tokens, and each failure kind
"""

import random
import string
from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from bookshelf.exceptions import InvalidSignature, MalformedToken, TokenExpired
from bookshelf.services.security import ALGORITHM, PasswordHasher, TokenService

SECRET = "a-test-signing-secret-that-is-long-enough-123"

rng = random.Random(20250401)


def random_password(min_length: int = 2, max_length: int = 40) -> str:
    length = rng.randint(min_length, max_length)
    return "".join(rng.choice(string.ascii_letters + string.digits + string.punctuation) for _ in range(length))


@pytest.fixture(scope="module")
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(secret=SECRET, expires_in=timedelta(hours=1))


class TestPasswordHasher:
    def test_hash_is_bcrypt_and_not_plaintext(self, hasher: PasswordHasher):
        hashed = hasher.hash("SecurePass123")

        assert hashed != "SecurePass123"
        assert hashed.startswith("$2b$04$")

    def test_same_password_gets_different_salts(self, hasher: PasswordHasher):
        assert hasher.hash("SecurePass123") != hasher.hash("SecurePass123")

    @pytest.mark.parametrize("password", [random_password() for _ in range(10)])
    def test_same_password_verifies(self, hasher: PasswordHasher, password: str):
        assert hasher.verify(password, hasher.hash(password)) is True

    @pytest.mark.parametrize(
        "password,other",
        [(random_password(), random_password()) for _ in range(10)],
    )
    def test_other_password_does_not_verify(
        self, hasher: PasswordHasher, password: str, other: str
    ):
        if other == password:
            other += "x"
        assert hasher.verify(other, hasher.hash(password)) is False

    def test_wrong_password_returns_false(self, hasher: PasswordHasher):
        hashed = hasher.hash("SecurePass123")

        assert hasher.verify("securepass123", hashed) is False
        assert hasher.verify("", hashed) is False

    @pytest.mark.parametrize("stored", [None, "", "not-a-bcrypt-hash"])
    def test_missing_or_garbage_hash_returns_false(self, hasher: PasswordHasher, stored):
        assert hasher.verify("SecurePass123", stored) is False

    def test_cost_factor_is_configurable(self):
        assert PasswordHasher(rounds=5).hash("pw").startswith("$2b$05$")


class TestTokenIssue:
    def test_token_is_a_jwt(self, tokens: TokenService):
        token = tokens.issue("65f1c0ffee0000000000abcd")

        assert token.count(".") == 2

    def test_token_claims(self, tokens: TokenService):
        before = datetime.now(UTC).replace(microsecond=0)
        token = tokens.issue("65f1c0ffee0000000000abcd")

        claims = jwt.get_unverified_claims(token)
        assert claims["sub"] == "65f1c0ffee0000000000abcd"
        assert claims["exp"] - claims["iat"] == 3600
        assert claims["iat"] >= int(before.timestamp())

    def test_round_trip(self, tokens: TokenService):
        token = tokens.issue("65f1c0ffee0000000000abcd")

        assert tokens.verify(token) == {"subject": "65f1c0ffee0000000000abcd"}

    def test_secret_is_required(self):
        with pytest.raises(ValueError):
            TokenService(secret="", expires_in=timedelta(days=1))


class TestTokenVerify:
    @pytest.mark.parametrize(
        "token",
        ["invalidtoken123", "a.b", "not.a.jwt", ""],
    )
    def test_malformed(self, tokens: TokenService, token: str):
        with pytest.raises(MalformedToken):
            tokens.verify(token)

    def test_wrong_secret(self, tokens: TokenService):
        other = TokenService(secret="another-secret-of-sufficient-length-456", expires_in=timedelta(hours=1))
        token = other.issue("65f1c0ffee0000000000abcd")

        with pytest.raises(InvalidSignature):
            tokens.verify(token)

    def test_tampered_payload(self, tokens: TokenService):
        header, _, signature = tokens.issue("65f1c0ffee0000000000abcd").split(".")
        forged_payload = jwt.encode(
            {"sub": "someone-else", "exp": datetime.now(UTC) + timedelta(hours=1)},
            SECRET,
            algorithm=ALGORITHM,
        ).split(".")[1]

        with pytest.raises(InvalidSignature):
            tokens.verify(f"{header}.{forged_payload}.{signature}")

    def test_expired(self, tokens: TokenService):
        token = jwt.encode(
            {
                "sub": "65f1c0ffee0000000000abcd",
                "iat": datetime.now(UTC) - timedelta(hours=2),
                "exp": datetime.now(UTC) - timedelta(hours=1),
            },
            SECRET,
            algorithm=ALGORITHM,
        )

        with pytest.raises(TokenExpired):
            tokens.verify(token)

    def test_expired_by_configured_lifetime(self):
        short_lived = TokenService(secret=SECRET, expires_in=timedelta(seconds=-1))

        with pytest.raises(TokenExpired):
            short_lived.verify(short_lived.issue("65f1c0ffee0000000000abcd"))

    def test_missing_subject(self, tokens: TokenService):
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(hours=1)},
            SECRET,
            algorithm=ALGORITHM,
        )

        with pytest.raises(MalformedToken):
            tokens.verify(token)
