"""
FastAPI auth router: code exchange endpoint.

Clients that already hold a Microsoft authorization code (SPA popup, native
app, another backend) POST it here, or pass it as ?code= / a `code` header.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from msg_authcode.dependencies import run_strategy
from msg_authcode.result import Outcome
from msg_authcode.strategy import MicrosoftAuthCodeStrategy

logger = logging.getLogger(__name__)


def _info_payload(info):
    """Exceptions are reported by message only."""
    if isinstance(info, Exception):
        return str(info)
    return jsonable_encoder(info)


def create_auth_router(strategy: MicrosoftAuthCodeStrategy, prefix: str = "/auth/microsoft"):
    """Create an APIRouter with GET and POST {prefix}/code endpoints."""
    router = APIRouter(prefix=prefix)

    @router.api_route("/code", methods=["GET", "POST"], name="auth_code")
    async def auth_code(request: Request):
        """Exchange the code and return the verified user."""
        result = await run_strategy(strategy, request)

        if result.outcome is Outcome.ERROR:
            logger.error("Authentication error: %s", result.error)
            return JSONResponse({"error": "authentication_error"}, status_code=500)
        if result.outcome is Outcome.FAIL:
            return JSONResponse(
                {"error": "unauthenticated", "info": _info_payload(result.info)},
                status_code=401,
            )
        return {"user": jsonable_encoder(result.user), "info": _info_payload(result.info)}

    return router
