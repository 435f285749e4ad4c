"""
Strategy configuration for the Microsoft auth-code strategy.

Built once at startup, either directly or from AZURE_* environment variables.
The app entrypoint is expected to call load_dotenv() before from_env().
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from msg_authcode.skip import SkipProfile

LOGIN_BASE = "https://login.microsoftonline.com"
DEFAULT_TENANT = "common"


def authorize_url(tenant: str = DEFAULT_TENANT) -> str:
    """Authorize endpoint for the given tenant (v2)."""
    return f"{LOGIN_BASE}/{tenant}/oauth2/v2.0/authorize"


def token_url(tenant: str = DEFAULT_TENANT) -> str:
    """Token endpoint for the given tenant (v2)."""
    return f"{LOGIN_BASE}/{tenant}/oauth2/v2.0/token"


def _env_flag(name: str) -> bool:
    """True when the env var is set to 1/true/yes/on."""
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class StrategyConfig:
    """Endpoints and app registration credentials. Never mutated after creation."""

    client_id: str
    client_secret: Optional[str] = None
    authorization_endpoint: str = field(default_factory=authorize_url)
    token_endpoint: str = field(default_factory=token_url)
    # Forwarded as redirect_uri on the exchange; must match the one the code was issued for.
    callback_url: Optional[str] = None
    pass_request_to_callback: bool = False
    skip_user_profile: SkipProfile = field(default_factory=SkipProfile.never)

    def __post_init__(self):
        """Reject configs without a client_id."""
        if not self.client_id:
            raise ValueError("MicrosoftAuthCodeStrategy requires a client_id")

    @classmethod
    def from_env(cls, **overrides) -> "StrategyConfig":
        """
        Load config from the environment.

        AZURE_TENANT_ID (default "common") picks the default endpoints;
        AZURE_AUTHORIZATION_URL / AZURE_TOKEN_URL override them outright.
        Keyword overrides (e.g. skip_user_profile) win over the environment.
        """
        tenant = os.getenv("AZURE_TENANT_ID") or DEFAULT_TENANT
        values = {
            "client_id": os.getenv("AZURE_CLIENT_ID"),
            "client_secret": os.getenv("AZURE_CLIENT_SECRET"),
            "authorization_endpoint": os.getenv("AZURE_AUTHORIZATION_URL") or authorize_url(tenant),
            "token_endpoint": os.getenv("AZURE_TOKEN_URL") or token_url(tenant),
            "callback_url": os.getenv("AZURE_REDIRECT_URI"),
            "pass_request_to_callback": _env_flag("AZURE_PASS_REQUEST_TO_CALLBACK"),
        }
        values.update(overrides)
        return cls(**values)
