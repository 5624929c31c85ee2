"""
Tests for the Bearer Token Gate

Every protected route goes through get_current_user. These tests use
GET /api/auth/me as the target route, plus one write route to check the gate
runs before the handler does anything.
"""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import Session

from bookshelf.config import get_settings
from bookshelf.dependencies import extract_bearer_token
from bookshelf.models import User
from bookshelf.services.security import ALGORITHM, TokenService

ME_URL = "/api/auth/me"
NOT_AUTHORIZED = {"success": False, "message": "Not authorized to access this route"}


class TestExtractBearerToken:
    @pytest.mark.parametrize(
        "header,expected",
        [
            ("Bearer abc.def.ghi", "abc.def.ghi"),
            (None, None),
            ("", None),
            ("Bearer ", None),
            ("bearer abc", None),
            ("BEARER abc", None),
            ("Token abc", None),
            ("Bearerabc", None),
        ],
    )
    def test_extract(self, header, expected):
        assert extract_bearer_token(header) == expected


class TestGateRejections:
    def test_missing_header(self, client: TestClient):
        response = client.get(ME_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == NOT_AUTHORIZED

    @pytest.mark.parametrize("scheme", ["bearer", "Token", "Basic"])
    def test_wrong_scheme(self, client: TestClient, sample_user: User, token_service: TokenService, scheme: str):
        token = token_service.issue(sample_user.id)

        response = client.get(ME_URL, headers={"Authorization": f"{scheme} {token}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == NOT_AUTHORIZED

    def test_empty_token(self, client: TestClient):
        response = client.get(ME_URL, headers={"Authorization": "Bearer "})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == NOT_AUTHORIZED

    def test_malformed_token(self, client: TestClient):
        response = client.get(ME_URL, headers={"Authorization": "Bearer invalidtoken123"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == NOT_AUTHORIZED

    def test_wrong_signature(self, client: TestClient, sample_user: User):
        forged = TokenService(
            secret="somebody-elses-secret-of-plenty-length",
            expires_in=timedelta(hours=1),
        ).issue(sample_user.id)

        response = client.get(ME_URL, headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == NOT_AUTHORIZED

    def test_expired_token(self, client: TestClient, sample_user: User):
        expired = jwt.encode(
            {
                "sub": sample_user.id,
                "iat": datetime.now(UTC) - timedelta(days=8),
                "exp": datetime.now(UTC) - timedelta(days=1),
            },
            get_settings().jwt_secret,
            algorithm=ALGORITHM,
        )

        response = client.get(ME_URL, headers={"Authorization": f"Bearer {expired}"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == NOT_AUTHORIZED

    def test_deleted_user(self, client: TestClient, db_session: Session, sample_user: User, auth_headers):
        headers = auth_headers(sample_user)
        db_session.delete(sample_user)
        db_session.commit()

        response = client.get(ME_URL, headers=headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"success": False, "message": "User no longer exists"}

    def test_gate_runs_before_write(self, client: TestClient, db_session: Session):
        response = client.post(
            "/api/books",
            json={"title": "Dune", "author": "Frank Herbert"},
            headers={"Authorization": "Bearer invalidtoken123"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == NOT_AUTHORIZED


class TestGateSuccess:
    def test_valid_token(self, client: TestClient, sample_user: User, auth_headers):
        response = client.get(ME_URL, headers=auth_headers(sample_user))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["id"] == sample_user.id

    def test_token_from_other_instance_with_same_secret(
        self, client: TestClient, sample_user: User, token_service: TokenService
    ):
        other = TokenService(secret=get_settings().jwt_secret, expires_in=timedelta(minutes=5))

        response = client.get(ME_URL, headers={"Authorization": f"Bearer {other.issue(sample_user.id)}"})

        assert response.status_code == status.HTTP_200_OK
