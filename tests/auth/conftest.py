"""
Auth fixtures.

We avoid a live DB by pairing an in-memory repository with a fake DB session
that stages writes until commit, and enforces the same unique/foreign-key
constraints as the real schema.
"""

from __future__ import annotations

import datetime as dt

import pytest  # type: ignore[import-not-found]
import sqlalchemy as sa  # type: ignore[import-not-found]

from portal.auth.models import Session, User
from portal.auth.service import AuthService
from portal.auth.sessions import SessionIssuer


class FakeDbSession:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.sessions: dict[str, Session] = {}
        self._staged_users: dict[str, User] = {}
        self._staged_sessions: dict[str, Session] = {}
        self._deleted_sessions: set[str] = set()
        self.commits = 0
        self.rollbacks = 0

    def visible_users(self) -> dict[str, User]:
        return {**self.users, **self._staged_users}

    def visible_sessions(self) -> dict[str, Session]:
        merged = {**self.sessions, **self._staged_sessions}
        return {k: v for k, v in merged.items() if k not in self._deleted_sessions}

    async def commit(self) -> None:
        self.users.update(self._staged_users)
        self.sessions.update(self._staged_sessions)
        for session_id in self._deleted_sessions:
            self.sessions.pop(session_id, None)
        self._clear()
        self.commits += 1

    async def rollback(self) -> None:
        self._clear()
        self.rollbacks += 1

    def _clear(self) -> None:
        self._staged_users.clear()
        self._staged_sessions.clear()
        self._deleted_sessions.clear()


def _integrity_error(detail: str) -> sa.exc.IntegrityError:
    return sa.exc.IntegrityError("INSERT", {}, Exception(detail))


class FakeAuthRepository:
    async def get_user_by_id(self, session, *, user_id):  # type: ignore[no-untyped-def]
        return session.visible_users().get(user_id)

    async def get_user_by_username(self, session, *, username):  # type: ignore[no-untyped-def]
        for user in session.visible_users().values():
            if user.username == username:
                return user
        return None

    async def insert_user(self, session, *, user_id, username, password_hash):  # type: ignore[no-untyped-def]
        users = session.visible_users()
        if user_id in users:
            raise _integrity_error("duplicate key value violates users_pkey")
        if any(u.username == username for u in users.values()):
            raise _integrity_error("duplicate key value violates users_username_unique")
        user = User(id=user_id, username=username, password=password_hash)
        session._staged_users[user_id] = user
        return user

    async def insert_session(self, session, *, session_id, user_id, expires_at):  # type: ignore[no-untyped-def]
        if user_id not in session.visible_users():
            raise _integrity_error("violates foreign key constraint sessions_user_id_fkey")
        s = Session(id=session_id, user_id=user_id, expires_at=expires_at)
        session._staged_sessions[session_id] = s
        return s

    async def get_session_by_id(self, session, *, session_id):  # type: ignore[no-untyped-def]
        return session.visible_sessions().get(session_id)

    async def update_session_expiry(self, session, *, session_id, expires_at):  # type: ignore[no-untyped-def]
        s = session.visible_sessions()[session_id]
        s.expires_at = expires_at
        session._staged_sessions[session_id] = s

    async def delete_session(self, session, *, session_id):  # type: ignore[no-untyped-def]
        if session_id not in session.visible_sessions():
            return 0
        session._deleted_sessions.add(session_id)
        return 1


class BrokenSessionRepository(FakeAuthRepository):
    async def insert_session(self, session, *, session_id, user_id, expires_at):  # type: ignore[no-untyped-def]
        raise sa.exc.OperationalError("INSERT", {}, Exception("connection lost"))


def _issuer(repo) -> SessionIssuer:  # type: ignore[no-untyped-def]
    return SessionIssuer(
        repo=repo,
        ttl=dt.timedelta(days=30),
        cookie_name="auth_session",
        cookie_secure=False,
        cookie_samesite="lax",
    )


@pytest.fixture()
def db() -> FakeDbSession:
    return FakeDbSession()


@pytest.fixture()
def repo() -> FakeAuthRepository:
    return FakeAuthRepository()


@pytest.fixture()
def issuer(repo: FakeAuthRepository) -> SessionIssuer:
    return _issuer(repo)


@pytest.fixture()
def auth_service(repo: FakeAuthRepository, issuer: SessionIssuer) -> AuthService:
    return AuthService(repo=repo, issuer=issuer)  # type: ignore[arg-type]


@pytest.fixture()
def broken_auth_service() -> AuthService:
    repo = BrokenSessionRepository()
    return AuthService(repo=repo, issuer=_issuer(repo))  # type: ignore[arg-type]
