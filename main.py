"""
FastAPI app: Microsoft authorization-code login without a redirect callback.

Decisions:
- .env is loaded before importing msg_authcode so AZURE_* values are available
  when the strategy config is built (Ruff E402 suppressed for that).
- The client obtains the code itself (MSAL popup, native app) and sends it to
  /auth/microsoft/code; redirect_uri must be AZURE_REDIRECT_URI.
- verify() only accepts users whose Graph profile has at least one email.
"""

import os

from dotenv import load_dotenv
from fastapi import Depends, FastAPI

load_dotenv()

from msg_authcode import (  # noqa: E402
    MicrosoftAuthCodeStrategy,
    StrategyConfig,
    create_auth_router,
    require_authcode_user,
)
from msg_authcode.logging_config import setup_logging  # noqa: E402

setup_logging(os.getenv("LOG_LEVEL", "INFO"))


async def verify(access_token, refresh_token, profile):
    """Map the Graph profile to the app's user; reject accounts without email."""
    if profile is None or not profile.emails:
        return None, {"message": "Microsoft account has no usable email"}
    return {
        "id": profile.id,
        "name": profile.display_name,
        "email": profile.emails[0].value,
    }, None


config = StrategyConfig.from_env()
strategy = MicrosoftAuthCodeStrategy(config, verify)

app = FastAPI()
app.include_router(create_auth_router(strategy))


@app.get("/")
async def home():
    return {"ok": True, "strategy": strategy.name}


# Example protected route: the code is exchanged on every call.
@app.post("/whoami")
async def whoami(user=Depends(require_authcode_user(strategy))):
    return {"user": user}
