from __future__ import annotations

import datetime as dt

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column  # type: ignore[import-not-found]


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(sa.Text(), primary_key=True)
    username: Mapped[str] = mapped_column(sa.Text(), nullable=False, unique=True)
    # Argon2id hash; nullable so accounts without a local password can exist.
    password: Mapped[str | None] = mapped_column(sa.Text(), nullable=True)


class Session(Base):
    __tablename__ = "sessions"

    id: Mapped[str] = mapped_column(sa.Text(), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        sa.Text(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at: Mapped[dt.datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False
    )
