"""
Microsoft auth-code strategy.

Authenticates a request that carries a Microsoft identity platform
authorization code directly (not via redirect): the code is exchanged for
tokens, the Graph /me profile is fetched and normalized, and the app's verify
coroutine decides who the user is.

Example:

    async def verify(access_token, refresh_token, profile):
        user = await users.find_or_create(profile.id)
        return user, None

    strategy = MicrosoftAuthCodeStrategy(StrategyConfig.from_env(), verify)
    result = await strategy.authenticate(await from_starlette(request))
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from msg_authcode.client import AuthlibOAuth2Client
from msg_authcode.config import StrategyConfig
from msg_authcode.errors import InternalOAuthError, OAuth2ClientError
from msg_authcode.profile import GRAPH_ME_URL, Profile, parse_profile
from msg_authcode.protocol import OAuth2Client, TokenResult
from msg_authcode.request import AuthCodeRequest, extract_code, has_provider_error
from msg_authcode.result import AuthResult

logger = logging.getLogger(__name__)

# verify(access_token, refresh_token, profile) -> (user, info), or with the
# request prepended when pass_request_to_callback is set.
VerifyFunc = Callable[..., Awaitable[tuple[Any, Any]]]


class MicrosoftAuthCodeStrategy:
    """Authenticate requests carrying a Microsoft authorization code."""

    name: str = "microsoft-authcode"

    def __init__(
        self,
        config: StrategyConfig,
        verify: VerifyFunc,
        client: Optional[OAuth2Client] = None,
    ):
        """Store config and verify; build the authlib client unless one is given."""
        if verify is None:
            raise TypeError("MicrosoftAuthCodeStrategy requires a verify callback")
        self.config = config
        self.verify = verify
        self.client = client if client is not None else AuthlibOAuth2Client(config)

    async def authenticate(self, request: AuthCodeRequest) -> AuthResult:
        """Run extract -> exchange -> profile (or skip) -> verify. Never raises."""
        code = extract_code(request)
        if not code:
            if has_provider_error(request):
                logger.info("%s: provider reported an error upstream", self.name)
            else:
                logger.info("%s: no authorization code in request", self.name)
            return AuthResult.failed()

        try:
            tokens = await self._exchange_auth_code(code)
        except Exception as e:
            logger.warning("%s: code exchange failed: %s", self.name, e)
            return AuthResult.failed(e)

        try:
            profile = await self._load_user_profile(tokens.access_token)
        except Exception as e:
            logger.warning("%s: could not load user profile: %s", self.name, e)
            return AuthResult.failed(e)

        return await self._verify(request, tokens, profile)

    async def _exchange_auth_code(self, code: str) -> TokenResult:
        """Exchange the code with the authorization_code grant and configured redirect_uri."""
        params = {
            "grant_type": "authorization_code",
            "redirect_uri": self.config.callback_url,
        }
        return await self.client.exchange_code_for_token(code, params)

    async def user_profile(self, access_token: str) -> Profile:
        """
        Fetch and normalize the Graph /me profile.

        Client failures are wrapped in InternalOAuthError; a malformed body
        raises the json.JSONDecodeError unchanged.
        """
        try:
            body = await self.client.authenticated_get(GRAPH_ME_URL, access_token)
        except OAuth2ClientError as e:
            raise InternalOAuthError("failed to fetch user profile", e) from e
        return parse_profile(body)

    async def _load_user_profile(self, access_token: str) -> Optional[Profile]:
        """Fetch the profile unless skip_user_profile says otherwise (then None)."""
        if await self.config.skip_user_profile.should_skip(access_token):
            return None
        return await self.user_profile(access_token)

    async def _verify(self, request: AuthCodeRequest, tokens: TokenResult, profile) -> AuthResult:
        """Call verify once and map its outcome to success, fail or error."""
        args = (tokens.access_token, tokens.refresh_token, profile)
        if self.config.pass_request_to_callback:
            host_request = request.source if request.source is not None else request
            args = (host_request, *args)

        try:
            user, info = await self.verify(*args)
        except Exception as e:
            logger.exception("%s: verify callback raised", self.name)
            return AuthResult.errored(e)

        if not user:
            logger.info("%s: verify callback rejected user", self.name)
            return AuthResult.failed(info)
        return AuthResult.succeeded(user, info)
