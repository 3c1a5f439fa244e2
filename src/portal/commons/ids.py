from __future__ import annotations

import secrets

ID_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"

USER_ID_LENGTH = 15
SESSION_ID_LENGTH = 40


def generate_id(length: int) -> str:
    """Random opaque identifier over [a-z0-9] (project-wide standard)."""
    if length <= 0:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(length))


def new_user_id() -> str:
    return generate_id(USER_ID_LENGTH)


def new_session_id() -> str:
    return generate_id(SESSION_ID_LENGTH)
