from __future__ import annotations

from fastapi import HTTPException, Request


def require_user(request: Request) -> dict:
    """Raise 401 if no user is logged in."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_host(request: Request) -> dict:
    """Raise 401 if not logged in, 403 if not a host."""
    user = require_user(request)
    if user.get("role") != "host":
        raise HTTPException(status_code=403, detail="Host access required")
    return user
