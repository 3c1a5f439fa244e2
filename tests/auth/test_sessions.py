from __future__ import annotations

import datetime as dt

import pytest  # type: ignore[import-not-found]
import sqlalchemy as sa  # type: ignore[import-not-found]

from portal.auth.models import User
from portal.commons.ids import SESSION_ID_LENGTH

pytestmark = pytest.mark.anyio


def _seed_user(db, user_id: str = "u" * 15) -> User:  # type: ignore[no-untyped-def]
    user = User(id=user_id, username="alice99", password="x")
    db.users[user_id] = user
    return user


async def test_create_session_binds_user_and_future_expiry(db, issuer) -> None:  # type: ignore[no-untyped-def]
    user = _seed_user(db)
    s = await issuer.create_session(db, user_id=user.id, attributes={})
    await db.commit()

    assert len(s.id) == SESSION_ID_LENGTH
    assert s.user_id == user.id
    assert s.expires_at > dt.datetime.now(dt.UTC) + dt.timedelta(days=29)
    assert db.sessions[s.id].user_id == user.id


async def test_create_session_for_unknown_user_fails(db, issuer) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(sa.exc.IntegrityError):
        await issuer.create_session(db, user_id="nobody", attributes={})


def test_session_cookie_is_derived_from_session_id(issuer) -> None:  # type: ignore[no-untyped-def]
    cookie = issuer.create_session_cookie("abc123")
    assert cookie.name == "auth_session"
    assert cookie.value == "abc123"
    assert cookie.attributes == {
        "path": "/",
        "httponly": True,
        "secure": False,
        "samesite": "lax",
        "max_age": 30 * 24 * 60 * 60,
    }
    assert issuer.create_session_cookie("abc123") == cookie


def test_blank_cookie_expires_immediately(issuer) -> None:  # type: ignore[no-untyped-def]
    cookie = issuer.create_blank_session_cookie()
    assert cookie.value == ""
    assert cookie.attributes["max_age"] == 0


async def test_validate_session_returns_user(db, issuer) -> None:  # type: ignore[no-untyped-def]
    user = _seed_user(db)
    s = await issuer.create_session(db, user_id=user.id)
    await db.commit()

    result = await issuer.validate_session(db, session_id=s.id)
    assert result is not None
    auth_session, found = result
    assert found.id == user.id
    assert auth_session.fresh is False


async def test_validate_unknown_session(db, issuer) -> None:  # type: ignore[no-untyped-def]
    assert await issuer.validate_session(db, session_id="missing") is None


async def test_validate_expired_session_deletes_it(db, issuer) -> None:  # type: ignore[no-untyped-def]
    user = _seed_user(db)
    s = await issuer.create_session(db, user_id=user.id)
    await db.commit()
    db.sessions[s.id].expires_at = dt.datetime.now(dt.UTC) - dt.timedelta(seconds=1)

    assert await issuer.validate_session(db, session_id=s.id) is None
    assert s.id not in db.sessions


async def test_validate_session_extends_when_half_used(db, issuer) -> None:  # type: ignore[no-untyped-def]
    user = _seed_user(db)
    s = await issuer.create_session(db, user_id=user.id)
    await db.commit()
    db.sessions[s.id].expires_at = dt.datetime.now(dt.UTC) + dt.timedelta(days=2)

    result = await issuer.validate_session(db, session_id=s.id)
    assert result is not None
    auth_session, _ = result
    assert auth_session.fresh is True
    assert auth_session.expires_at > dt.datetime.now(dt.UTC) + dt.timedelta(days=29)
    assert db.sessions[s.id].expires_at == auth_session.expires_at


async def test_validate_accepts_naive_timestamps(db, issuer) -> None:  # type: ignore[no-untyped-def]
    user = _seed_user(db)
    s = await issuer.create_session(db, user_id=user.id)
    await db.commit()
    naive = (dt.datetime.now(dt.UTC) + dt.timedelta(days=20)).replace(tzinfo=None)
    db.sessions[s.id].expires_at = naive

    assert await issuer.validate_session(db, session_id=s.id) is not None


async def test_invalidate_session(db, issuer) -> None:  # type: ignore[no-untyped-def]
    user = _seed_user(db)
    s = await issuer.create_session(db, user_id=user.id)
    await db.commit()

    await issuer.invalidate_session(db, session_id=s.id)
    assert db.sessions == {}
