from __future__ import annotations

from typing import Any

import bcrypt

_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _add_user(username: str, password: str, role: str, profile_id: str) -> None:
    _users[username] = {
        "password_hash": _hash_password(password),
        "role": role,
        "profile_id": profile_id,
    }


def _seed_users() -> None:
    """Pre-seed demo accounts on import; profile ids refer to the catalog."""
    _add_user("user", "user123", "attendee", "user-123")
    _add_user("host", "host123", "host", "user-456")


def authenticate(username: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns ``{username, role, profile_id}`` or ``None``."""
    record = _users.get(username)
    if record and _verify_password(password, record["password_hash"]):
        return {
            "username": username,
            "role": record["role"],
            "profile_id": record["profile_id"],
        }
    return None


_seed_users()
