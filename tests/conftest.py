"""
Shared test configuration and fixtures.
"""

import json
from unittest.mock import AsyncMock

import pytest

from msg_authcode import MicrosoftAuthCodeStrategy, StrategyConfig, TokenResult

GRAPH_ME = {
    "id": "1",
    "displayName": "A B",
    "surname": "B",
    "givenName": "A",
    "mail": "a@b.com",
}


class FakeOAuth2Client:
    """OAuth2Client stand-in with AsyncMock methods so calls can be asserted."""

    def __init__(self, body: str = json.dumps(GRAPH_ME)):
        self.exchange_code_for_token = AsyncMock(
            return_value=TokenResult(
                access_token="at-123",
                refresh_token="rt-456",
                raw={"access_token": "at-123", "refresh_token": "rt-456", "token_type": "Bearer"},
            )
        )
        self.authenticated_get = AsyncMock(return_value=body)


@pytest.fixture
def config():
    return StrategyConfig(
        client_id="test-client-id",
        client_secret="test-client-secret",
        callback_url="http://localhost:8000/auth/microsoft/callback",
    )


@pytest.fixture
def fake_client():
    return FakeOAuth2Client()


@pytest.fixture
def verify():
    """Verify callback accepting every profile as a user dict."""
    return AsyncMock(side_effect=lambda at, rt, profile: ({"id": getattr(profile, "id", None)}, None))


@pytest.fixture
def strategy(config, verify, fake_client):
    return MicrosoftAuthCodeStrategy(config, verify, client=fake_client)


@pytest.fixture
def fake_client_factory():
    return FakeOAuth2Client
