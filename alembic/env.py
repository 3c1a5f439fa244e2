from __future__ import annotations

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool  # type: ignore[import-not-found]

from alembic import context
from portal.auth.models import Base
from portal.core.settings import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _get_url() -> str:
    # Migrations run synchronously; psycopg (v3) serves both modes.
    return (
        "postgresql+psycopg://"
        f"{settings.PORTAL_DB_USER}:{settings.PORTAL_DB_PASSWORD}"
        f"@{settings.PORTAL_DB_HOST}:{settings.PORTAL_DB_PORT}"
        f"/{settings.PORTAL_DB_NAME}"
    )


def run_migrations_offline() -> None:
    context.configure(
        url=_get_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = _get_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
