"""
Protocols for the collaborators the strategy depends on.

The strategy holds an OAuth2Client rather than inheriting from one, so tests
and hosts can swap in any object with these two coroutines.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class TokenResult:
    """Tokens from one code exchange. Not persisted anywhere."""

    access_token: str
    refresh_token: Optional[str] = None
    raw: dict = field(default_factory=dict)


@runtime_checkable
class OAuth2Client(Protocol):
    """Generic OAuth2 client: code exchange and bearer-authenticated GET."""

    async def exchange_code_for_token(self, code: str, params: dict[str, Any]) -> TokenResult:
        """Exchange an authorization code for tokens. Raises OAuth2ClientError."""
        ...

    async def authenticated_get(self, url: str, access_token: str) -> str:
        """GET url with a bearer token and return the response text. Raises OAuth2ClientError."""
        ...
