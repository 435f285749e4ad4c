"""
Inbound request shape and authorization-code extraction.

The code arrives directly from the client (SPA, mobile app, another service)
rather than through a redirect callback, so it may sit in the body, the query
string or a `code` header.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from starlette.requests import Request

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


@dataclass(frozen=True)
class AuthCodeRequest:
    """Body, query and header maps of one request. Any of them may be absent."""

    body: Optional[Mapping[str, Any]] = None
    query: Optional[Mapping[str, Any]] = None
    headers: Optional[Mapping[str, Any]] = None
    # Host framework request, handed to verify when pass_request_to_callback is set.
    source: Any = None


def has_provider_error(request: AuthCodeRequest) -> bool:
    """True when the query carries an `error` reported by the identity provider."""
    return bool(request.query and request.query.get("error"))


def extract_code(request: AuthCodeRequest) -> Optional[str]:
    """
    Return the authorization code, or None if the attempt must fail.

    Body wins over query, query over headers. A provider-reported `error` in
    the query fails the attempt; its details are not propagated.
    """
    if has_provider_error(request):
        return None
    for source in (request.body, request.query, request.headers):
        if source and source.get("code"):
            return source.get("code")
    return None


async def from_starlette(request: Request) -> AuthCodeRequest:
    """Build an AuthCodeRequest from a Starlette / FastAPI request."""
    content_type = request.headers.get("content-type", "")
    body = None
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            logger.debug("Ignoring malformed JSON body on %s", request.url.path)
            payload = None
        body = payload if isinstance(payload, dict) else None
    elif content_type.startswith(FORM_CONTENT_TYPES):
        body = dict(await request.form())

    return AuthCodeRequest(
        body=body,
        query=dict(request.query_params),
        headers=request.headers,
        source=request,
    )
