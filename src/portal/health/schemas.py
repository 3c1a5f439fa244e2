from __future__ import annotations

from pydantic import BaseModel


class HealthCheck(BaseModel):
    ok: bool
    detail: str | None = None


class HealthResponse(BaseModel):
    status: str
    db: HealthCheck
