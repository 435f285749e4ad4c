"""
Microsoft authorization-code authentication strategy.

Exposes the strategy and its config, the request/result types, the authlib
client, and FastAPI helpers (require_authcode_user, create_auth_router).
"""

from .client import AuthlibOAuth2Client
from .config import StrategyConfig
from .dependencies import require_authcode_user, run_strategy
from .errors import AuthCodeError, InternalOAuthError, OAuth2ClientError
from .profile import Email, Profile, ProfileName, parse_profile
from .protocol import OAuth2Client, TokenResult
from .request import AuthCodeRequest, extract_code, from_starlette
from .result import AuthResult, Outcome
from .router import create_auth_router
from .skip import SkipProfile
from .strategy import MicrosoftAuthCodeStrategy

__all__ = [
    "MicrosoftAuthCodeStrategy",
    "StrategyConfig",
    "SkipProfile",
    "AuthCodeRequest",
    "extract_code",
    "from_starlette",
    "AuthResult",
    "Outcome",
    "OAuth2Client",
    "TokenResult",
    "AuthlibOAuth2Client",
    "Profile",
    "ProfileName",
    "Email",
    "parse_profile",
    "AuthCodeError",
    "OAuth2ClientError",
    "InternalOAuthError",
    "require_authcode_user",
    "run_strategy",
    "create_auth_router",
]
