"""
Session issuer.

Sessions are rows keyed by an opaque random id; the cookie carries that id.
Expiry is enforced here on lookup: expired rows are dropped, and sessions
that have used up half of their lifetime are pushed forward and marked
`fresh` so the caller can re-issue the cookie.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portal.auth.models import User
from portal.auth.repository import AuthRepository
from portal.commons.ids import new_session_id
from portal.core.settings import settings


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


@dataclass
class AuthSession:
    id: str
    user_id: str
    expires_at: dt.datetime
    fresh: bool = False
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SessionCookie:
    name: str
    value: str
    attributes: dict[str, Any]


@dataclass
class SessionIssuer:
    repo: AuthRepository
    ttl: dt.timedelta
    cookie_name: str
    cookie_secure: bool
    cookie_samesite: str

    @classmethod
    def create(cls, repo: AuthRepository | None = None) -> "SessionIssuer":
        return cls(
            repo=repo or AuthRepository(),
            ttl=dt.timedelta(days=int(settings.AUTH_SESSION_TTL_DAYS)),
            cookie_name=settings.AUTH_COOKIE_NAME,
            cookie_secure=bool(settings.AUTH_COOKIE_SECURE),
            cookie_samesite=str(settings.AUTH_COOKIE_SAMESITE),
        )

    async def create_session(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        attributes: dict[str, Any] | None = None,
    ) -> AuthSession:
        expires_at = _utcnow() + self.ttl
        row = await self.repo.insert_session(
            session,
            session_id=new_session_id(),
            user_id=user_id,
            expires_at=expires_at,
        )
        return AuthSession(
            id=row.id,
            user_id=row.user_id,
            expires_at=row.expires_at,
            fresh=True,
            attributes=dict(attributes or {}),
        )

    def create_session_cookie(self, session_id: str) -> SessionCookie:
        return SessionCookie(
            name=self.cookie_name,
            value=session_id,
            attributes=self._cookie_attributes(int(self.ttl.total_seconds())),
        )

    def create_blank_session_cookie(self) -> SessionCookie:
        return SessionCookie(
            name=self.cookie_name,
            value="",
            attributes=self._cookie_attributes(0),
        )

    async def validate_session(
        self, session: AsyncSession, *, session_id: str
    ) -> tuple[AuthSession, User] | None:
        row = await self.repo.get_session_by_id(session, session_id=session_id)
        if row is None:
            return None

        now = _utcnow()
        expires_at = _as_aware(row.expires_at)
        if expires_at <= now:
            await self.repo.delete_session(session, session_id=row.id)
            await session.commit()
            return None

        user = await self.repo.get_user_by_id(session, user_id=row.user_id)
        if user is None:
            return None

        fresh = False
        if expires_at - now < self.ttl / 2:
            expires_at = now + self.ttl
            await self.repo.update_session_expiry(
                session, session_id=row.id, expires_at=expires_at
            )
            await session.commit()
            fresh = True

        return (
            AuthSession(
                id=row.id, user_id=row.user_id, expires_at=expires_at, fresh=fresh
            ),
            user,
        )

    async def invalidate_session(self, session: AsyncSession, *, session_id: str) -> None:
        await self.repo.delete_session(session, session_id=session_id)
        await session.commit()

    def _cookie_attributes(self, max_age: int) -> dict[str, Any]:
        return {
            "path": "/",
            "httponly": True,
            "secure": self.cookie_secure,
            "samesite": self.cookie_samesite,
            "max_age": max_age,
        }


def _as_aware(value: dt.datetime) -> dt.datetime:
    # Some drivers hand back naive UTC timestamps.
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.UTC)
    return value
