from __future__ import annotations

from pydantic_settings import (  # type: ignore[import-not-found]
    BaseSettings,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """
    App settings.

    Loads from environment variables and an optional local `.env` file.
    `.env` is gitignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    API_TITLE: str = "Portal API"
    API_VERSION: str = "0.1.0"

    # Database (Docker Compose defaults)
    PORTAL_DB_HOST: str = "localhost"
    PORTAL_DB_PORT: int = 5432
    PORTAL_DB_NAME: str = "portal"
    PORTAL_DB_USER: str = "portal"
    PORTAL_DB_PASSWORD: str = "portal"

    # Auth (HTTP-only cookie session)
    AUTH_COOKIE_NAME: str = "auth_session"
    # Browsers drop Secure cookies over plain http; enable in production.
    AUTH_COOKIE_SECURE: bool = False
    AUTH_COOKIE_SAMESITE: str = "lax"  # lax|strict|none
    AUTH_SESSION_TTL_DAYS: int = 30

    # Where the browser lands after a successful signup.
    SIGNUP_REDIRECT_PATH: str = "/"

    CORS_ORIGINS: str = "http://localhost:4321,http://127.0.0.1:4321"


settings = Settings()
