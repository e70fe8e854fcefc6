"""
FastAPI app: Flattr OAuth 2.0 login + session-based auth.

Decisions:
- .env is loaded before importing flattr_auth so FLATTR_* and SESSION_SECRET are
  available when the strategy is created (Ruff E402 suppressed for that).
- The verify callback maps the normalized Flattr profile to the session user;
  whatever it returns must be JSON-serializable (it is stored in the cookie session).
- Session secret from SESSION_SECRET env; default "change-me" is for dev only.
"""

import os

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

load_dotenv()

# Load .env before flattr_auth so FLATTR_* and SESSION_SECRET are set; Ruff E402.
from flattr_auth import FlattrStrategy, StrategyConfig, create_auth_router, require_user  # noqa: E402
from flattr_auth.logging_config import configure_logging  # noqa: E402

SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me")

configure_logging()


def verify(access_token, refresh_token, profile):
    """Accept every Flattr user; a real app would look up or create its own account here."""
    return {
        "provider": profile.provider,
        "id": profile.id,
        "display_name": profile.display_name,
    }


strategy = FlattrStrategy(StrategyConfig.from_env(), verify)

app = FastAPI()
app.add_middleware(SessionMiddleware, secret_key=SESSION_SECRET)
app.include_router(create_auth_router(strategy))


@app.get("/")
async def home(request: Request):
    user = request.session.get("user")
    return {"logged_in": bool(user), "user": user}


# Example protected route
@app.get("/private")
async def private_area(user=Depends(require_user())):
    return {"ok": True, "area": "private", "user": user["id"]}
