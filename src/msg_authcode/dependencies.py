"""
FastAPI dependencies that run the auth-code strategy on the current request.

Use as: Depends(require_authcode_user(strategy)). Success returns whatever the
verify callback produced as the user.
"""

import logging

from fastapi import HTTPException, Request

from msg_authcode.request import from_starlette
from msg_authcode.result import AuthResult, Outcome
from msg_authcode.strategy import MicrosoftAuthCodeStrategy

logger = logging.getLogger(__name__)


async def run_strategy(strategy: MicrosoftAuthCodeStrategy, request: Request) -> AuthResult:
    """Authenticate a Starlette request with the given strategy."""
    return await strategy.authenticate(await from_starlette(request))


def require_authcode_user(strategy: MicrosoftAuthCodeStrategy):
    """Dependency: request must carry a code that authenticates a user."""

    async def _dep(request: Request):
        result = await run_strategy(strategy, request)
        if result.outcome is Outcome.ERROR:
            logger.error("Authentication error on %s: %s", request.url.path, result.error)
            raise HTTPException(status_code=500, detail="Authentication error")
        if result.outcome is Outcome.FAIL:
            raise HTTPException(status_code=401, detail="Not authenticated")
        return result.user

    return _dep
