"""
Authlib-backed OAuth2 client.

A fresh AsyncOAuth2Client is opened per call: authlib stores the fetched token
on the client instance, and concurrent attempts must not see each other's tokens.
"""

import logging
from typing import Any

import httpx
from authlib.integrations.base_client import OAuthError
from authlib.integrations.httpx_client import AsyncOAuth2Client

from msg_authcode.config import StrategyConfig
from msg_authcode.errors import OAuth2ClientError
from msg_authcode.protocol import TokenResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20


class AuthlibOAuth2Client:
    """OAuth2Client implementation on top of authlib + httpx."""

    def __init__(self, config: StrategyConfig, timeout: float = DEFAULT_TIMEOUT):
        """Store the config; timeout is in seconds for every httpx call."""
        self.config = config
        self.timeout = timeout

    def _session(self) -> AsyncOAuth2Client:
        """Open a new authlib session carrying no token state."""
        return AsyncOAuth2Client(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            # Credentials in the form body, as Entra expects for confidential web apps.
            token_endpoint_auth_method="client_secret_post",
            token_endpoint=self.config.token_endpoint,
            timeout=self.timeout,
        )

    async def exchange_code_for_token(self, code: str, params: dict[str, Any]) -> TokenResult:
        """POST the code to the token endpoint and return the issued tokens."""
        params = dict(params)
        grant_type = params.pop("grant_type", "authorization_code")
        try:
            async with self._session() as session:
                token = await session.fetch_token(
                    self.config.token_endpoint,
                    grant_type=grant_type,
                    code=code,
                    **params,
                )
        except OAuthError as e:
            raise OAuth2ClientError(f"Token exchange rejected: {e}", data=e.description) from e
        except httpx.HTTPStatusError as e:
            raise OAuth2ClientError(
                "Token endpoint returned an error",
                status_code=e.response.status_code,
                data=e.response.text,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise OAuth2ClientError(f"Token exchange failed: {e}") from e

        if not token.get("access_token"):
            raise OAuth2ClientError("Token response did not include an access_token", data=dict(token))

        logger.debug("Exchanged authorization code at %s", self.config.token_endpoint)
        return TokenResult(
            access_token=token["access_token"],
            refresh_token=token.get("refresh_token"),
            raw=dict(token),
        )

    async def authenticated_get(self, url: str, access_token: str) -> str:
        """GET url with the access token as a bearer header and return the body text."""
        headers = {"Authorization": f"Bearer {access_token}"}
        try:
            async with self._session() as session:
                # withhold_token: the bearer goes in the header above, never in session state.
                r = await session.request("GET", url, headers=headers, withhold_token=True)
        except httpx.HTTPError as e:
            raise OAuth2ClientError(f"GET {url} failed: {e}") from e

        if not r.is_success:
            raise OAuth2ClientError(
                f"GET {url} returned {r.status_code}",
                status_code=r.status_code,
                data=r.text,
            )
        return r.text
