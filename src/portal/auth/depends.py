from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Cookie, Depends  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portal.auth.models import User
from portal.auth.service import AuthService
from portal.auth.sessions import AuthSession
from portal.commons.depends import database_session
from portal.core.settings import settings


@lru_cache
def get_auth_service() -> AuthService:
    return AuthService.create()


async def current_session_optional(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
    session_id: str | None = Cookie(default=None, alias=settings.AUTH_COOKIE_NAME),
) -> tuple[AuthSession, User] | None:
    if not session_id:
        return None
    return await svc.current_user(session, session_id=session_id)
