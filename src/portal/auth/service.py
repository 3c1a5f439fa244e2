from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]

from portal.auth.crypto import hash_password_async
from portal.auth.exceptions import DuplicateUsernameException, SessionCreationException
from portal.auth.models import User
from portal.auth.repository import AuthRepository
from portal.auth.sessions import AuthSession, SessionCookie, SessionIssuer
from portal.commons.ids import new_user_id
from portal.commons.logging import logger


@dataclass
class AuthService:
    repo: AuthRepository
    issuer: SessionIssuer

    @classmethod
    def create(cls) -> "AuthService":
        repo = AuthRepository()
        return cls(repo=repo, issuer=SessionIssuer.create(repo))

    async def signup(
        self, session: AsyncSession, *, username: str, password: str
    ) -> tuple[User, SessionCookie]:
        """
        Create a user and log them in.

        User and session rows are written in one transaction, so a failed
        session insert leaves no orphaned account behind.
        """
        user_id = new_user_id()
        pw_hash = await hash_password_async(password)

        try:
            user = await self.repo.insert_user(
                session, user_id=user_id, username=username, password_hash=pw_hash
            )
        except IntegrityError as exc:
            await session.rollback()
            logger.info("Signup rejected: username already taken")
            raise DuplicateUsernameException(
                "username_taken", "A user with this username already exists"
            ) from exc

        try:
            auth_session = await self.issuer.create_session(
                session, user_id=user_id, attributes={}
            )
            await session.commit()
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.error("Failed to create session for new user %s", user_id)
            raise SessionCreationException(
                "session_creation_failed", "Could not create a session"
            ) from exc

        logger.info("User signed up: %s", user.id)
        return user, self.issuer.create_session_cookie(auth_session.id)

    async def current_user(
        self, session: AsyncSession, *, session_id: str
    ) -> Optional[tuple[AuthSession, User]]:
        return await self.issuer.validate_session(session, session_id=session_id)

    async def logout(self, session: AsyncSession, *, session_id: str) -> SessionCookie:
        await self.issuer.invalidate_session(session, session_id=session_id)
        return self.issuer.create_blank_session_cookie()
