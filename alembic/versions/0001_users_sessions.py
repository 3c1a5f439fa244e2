"""users + sessions

Revision ID: 0001_users_sessions
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa  # type: ignore[import-not-found]

from alembic import op

revision = "0001_users_sessions"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Text(), primary_key=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        # Argon2id hash (PHC string).
        sa.Column("password", sa.Text(), nullable=True),
    )
    op.create_index("users_username_unique", "users", ["username"], unique=True)

    op.create_table(
        "sessions",
        # Cookie value; opaque random id.
        sa.Column("id", sa.Text(), primary_key=True, nullable=False),
        sa.Column(
            "user_id",
            sa.Text(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("sessions_user_id_idx", "sessions", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index("sessions_user_id_idx", table_name="sessions")
    op.drop_table("sessions")

    op.drop_index("users_username_unique", table_name="users")
    op.drop_table("users")
