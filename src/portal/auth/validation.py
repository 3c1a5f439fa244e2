from __future__ import annotations

from typing import Any

from portal.auth.exceptions import (
    InvalidPasswordException,
    InvalidUsernameException,
    MissingFieldException,
)

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6


def validate_credentials(username: Any, password: Any) -> tuple[str, str]:
    """
    Check raw form values and narrow them to text.

    Empty strings count as missing. Uploaded files and other non-text values
    are rejected by the per-field checks.
    """
    if not username or not password:
        raise MissingFieldException(
            "missing_field", "Username and password are required."
        )

    if not isinstance(username, str) or len(username) < USERNAME_MIN_LENGTH:
        raise InvalidUsernameException(
            "invalid_username",
            f"Username must be at least {USERNAME_MIN_LENGTH} characters.",
        )

    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        raise InvalidPasswordException(
            "invalid_password",
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters.",
        )

    return username, password
