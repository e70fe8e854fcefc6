"""
Session helpers and FastAPI dependencies.

Reads the user stored in request.session by the auth callback. Set
SESSION_MAX_IDLE_SECONDS to treat the user as logged out after that long
without a request (default 0 = disabled).
"""

import os
import time
from typing import Any, Optional

from fastapi import HTTPException, Request


def _session_max_idle_seconds() -> int:
    """Max seconds without a request before user is considered inactive. 0 = disabled."""
    return int(os.getenv("SESSION_MAX_IDLE_SECONDS", "0"))


def get_user(request: Request) -> Optional[Any]:
    """Return the user stored in the session, or None if not authenticated."""
    return request.session.get("user")


def is_session_stale(request: Request) -> bool:
    """Return True if the user has been idle longer than SESSION_MAX_IDLE_SECONDS."""
    max_idle = _session_max_idle_seconds()
    if max_idle <= 0:
        return False
    now = int(time.time())
    last_at = request.session.get("last_activity_at", now)
    return now - last_at >= max_idle


def touch_session_activity(request: Request) -> None:
    """Update last_activity_at in the session so idle timeout is based on recent requests."""
    request.session["last_activity_at"] = int(time.time())


def require_user():
    """
    Dependency: request must carry an authenticated, non-idle session.
    Use as: Depends(require_user()). Returns the session user.
    """

    async def _dep(request: Request):
        if "user" not in request.session:
            raise HTTPException(status_code=401, detail="Not authenticated")
        if is_session_stale(request):
            request.session.clear()
            raise HTTPException(
                status_code=401,
                detail="Session expired or inactive; please log in again",
            )
        touch_session_activity(request)
        return request.session["user"]

    return _dep
