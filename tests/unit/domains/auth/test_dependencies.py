"""
Tests for authentication dependencies in todo_api/domains/auth/dependencies.py

Tests bearer token validation and principal resolution.
"""

from unittest.mock import patch

import jwt
import pytest
from fastapi.testclient import TestClient

from todo_api.core.settings import settings
from todo_api.domains.auth.dependencies import get_current_principal
from todo_api.domains.auth.service import create_access_token, decode_access_token
from todo_api.domains.auth.types import Principal
from todo_api.shared.exceptions import InvalidTokenError


class TestAccessTokens:
    def test_round_trip(self):
        payload = decode_access_token(create_access_token("user-1"))

        assert payload.sub == "user-1"
        assert payload.exp > payload.iat

    def test_signed_with_configured_secret(self):
        token = create_access_token("user-1")

        with patch("todo_api.domains.auth.service.settings.JWT_SECRET", "rotated"):
            with pytest.raises(jwt.InvalidSignatureError):
                decode_access_token(token)

    def test_token_without_sub_rejected(self):
        token = jwt.encode(
            {"exp": 4102444800}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM
        )

        with pytest.raises(jwt.MissingRequiredClaimError):
            decode_access_token(token)


class TestGetCurrentPrincipal:
    def test_valid_token(self, valid_jwt_token: str, test_user_id: str):
        principal = get_current_principal(f"Bearer {valid_jwt_token}")
        assert principal == Principal(user_id=test_user_id)

    @pytest.mark.parametrize("header", [None, "", "Token abc", "Bearer"])
    def test_missing_or_malformed_header(self, header):
        with pytest.raises(InvalidTokenError) as exc_info:
            get_current_principal(header)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Missing token"

    def test_wrong_signature(self, invalid_jwt_token: str):
        with pytest.raises(InvalidTokenError) as exc_info:
            get_current_principal(f"Bearer {invalid_jwt_token}")

        assert exc_info.value.detail == "Invalid or expired token"
        assert exc_info.value.code == "INVALID_TOKEN"

    def test_expired_token(self, expired_jwt_token: str):
        with pytest.raises(InvalidTokenError):
            get_current_principal(f"Bearer {expired_jwt_token}")

    def test_garbage_token(self):
        with pytest.raises(InvalidTokenError):
            get_current_principal("Bearer not.a.valid.jwt.token")


class TestSessionRoute:
    def test_session_lists_organizations(self, client: TestClient, auth_headers_for):
        headers = auth_headers_for("user-1")
        org = client.post(
            "/api/v1/organizations",
            json={"name": "Acme", "slug": "acme"},
            headers=headers,
        ).json()

        response = client.get("/api/v1/session", headers=headers)

        assert response.status_code == 200
        assert response.json()["user_id"] == "user-1"
        assert [o["id"] for o in response.json()["organizations"]] == [org["id"]]

    def test_session_requires_token(self, client: TestClient):
        response = client.get("/api/v1/session")

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_TOKEN"

    def test_health(self, client: TestClient):
        assert client.get("/health").json() == {"status": "healthy"}
