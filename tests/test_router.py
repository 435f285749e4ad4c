"""
Tests for the FastAPI router and require_authcode_user dependency.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from msg_authcode import (
    MicrosoftAuthCodeStrategy,
    OAuth2ClientError,
    create_auth_router,
    require_authcode_user,
)


@pytest.fixture
def verify():
    async def _verify(access_token, refresh_token, profile):
        if not profile.emails:
            return None, {"message": "no email"}
        return {"id": profile.id, "email": profile.emails[0].value}, {"via": "code"}

    return AsyncMock(side_effect=_verify)


@pytest.fixture
def client(config, verify, fake_client):
    strategy = MicrosoftAuthCodeStrategy(config, verify, client=fake_client)
    app = FastAPI()
    app.include_router(create_auth_router(strategy))

    @app.post("/whoami")
    async def whoami(user=Depends(require_authcode_user(strategy))):
        return {"user": user}

    return TestClient(app)


class TestAuthCodeEndpoint:
    def test_post_json_code_success(self, client, fake_client):
        response = client.post("/auth/microsoft/code", json={"code": "abc"})

        assert response.status_code == 200
        assert response.json() == {"user": {"id": "1", "email": "a@b.com"}, "info": {"via": "code"}}
        assert fake_client.exchange_code_for_token.await_args.args[0] == "abc"

    def test_get_query_code_success(self, client):
        response = client.get("/auth/microsoft/code", params={"code": "abc"})

        assert response.status_code == 200
        assert response.json()["user"]["id"] == "1"

    def test_missing_code_returns_401(self, client, fake_client):
        response = client.post("/auth/microsoft/code", json={})

        assert response.status_code == 401
        assert response.json() == {"error": "unauthenticated", "info": None}
        fake_client.exchange_code_for_token.assert_not_called()

    def test_provider_error_returns_401(self, client):
        response = client.get(
            "/auth/microsoft/code",
            params={"error": "access_denied", "error_description": "declined"},
        )

        assert response.status_code == 401
        assert response.json()["info"] is None

    def test_exchange_failure_message_in_info(self, client, fake_client):
        fake_client.exchange_code_for_token.side_effect = OAuth2ClientError("Token exchange rejected")

        response = client.post("/auth/microsoft/code", json={"code": "abc"})

        assert response.status_code == 401
        assert response.json()["info"] == "Token exchange rejected"

    def test_rejected_user_returns_info(self, client, fake_client):
        fake_client.authenticated_get.return_value = '{"id": "2"}'

        response = client.post("/auth/microsoft/code", json={"code": "abc"})

        assert response.status_code == 401
        assert response.json()["info"] == {"message": "no email"}

    def test_verify_error_returns_500(self, client, verify):
        verify.side_effect = RuntimeError("db down")

        response = client.post("/auth/microsoft/code", json={"code": "abc"})

        assert response.status_code == 500
        assert response.json() == {"error": "authentication_error"}


class TestRequireAuthcodeUser:
    def test_returns_user(self, client):
        response = client.post("/whoami", headers={"code": "abc"})

        assert response.status_code == 200
        assert response.json() == {"user": {"id": "1", "email": "a@b.com"}}

    def test_no_code_is_401(self, client):
        response = client.post("/whoami")

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_verify_error_is_500(self, client, verify):
        verify.side_effect = RuntimeError("db down")

        response = client.post("/whoami", json={"code": "abc"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Authentication error"
