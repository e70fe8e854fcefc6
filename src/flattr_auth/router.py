"""
FastAPI auth router: login, callback, /me, logout.

Builds an APIRouter around an OAuthProvider strategy. A successful callback
stores the user returned by the verify callback in request.session["user"].
"""

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, RedirectResponse

from flattr_auth.errors import AuthenticationFailed, ParseError, TransportError
from flattr_auth.logging_config import get_logger
from flattr_auth.protocol import OAuthProvider
from flattr_auth.session import touch_session_activity


def create_auth_router(
    provider: OAuthProvider,
    success_url: str = "/me",
    failure_url: Optional[str] = None,
):
    """Create an APIRouter with /auth/<name>, /auth/<name>/callback, /me, and /logout endpoints."""
    router = APIRouter()
    log = get_logger(strategy=provider.name)
    callback_name = f"{provider.name}_auth_callback"

    @router.get(f"/auth/{provider.name}", name=f"{provider.name}_login")
    async def login(request: Request):
        """Redirect the user to the provider's authorization page."""
        return await provider.login_redirect(request)

    @router.get(f"/auth/{provider.name}/callback", name=callback_name)
    async def auth_callback(request: Request):
        """Handle OAuth callback: exchange code, verify profile, store user, redirect."""
        try:
            user = await provider.handle_callback(request)
        except AuthenticationFailed as e:
            log.info("auth_failed", reason=e.reason)
            if failure_url:
                return RedirectResponse(url=failure_url)
            return JSONResponse({"error": e.reason, "error_description": e.description}, status_code=401)
        except (TransportError, ParseError) as e:
            log.warning("profile_fetch_failed", error=str(e))
            if failure_url:
                return RedirectResponse(url=failure_url)
            return JSONResponse({"error": "profile_unavailable"}, status_code=502)

        request.session["user"] = user
        touch_session_activity(request)
        return RedirectResponse(url=success_url)

    @router.get("/me")
    async def me(request: Request):
        """Return current user; redirect to login if not authenticated."""
        if "user" not in request.session:
            return RedirectResponse(url=f"/auth/{provider.name}")
        return {"user": request.session["user"]}

    @router.get("/logout")
    async def logout(request: Request):
        """Clear session and redirect to home."""
        request.session.clear()
        return RedirectResponse(url="/")

    return router
