from __future__ import annotations

from portal.health import repository


async def get_health_payload() -> dict:
    db_ok, db_detail = await repository.check_db()
    # The database is the only hard dependency of the API.
    return {
        "status": "ok" if db_ok else "error",
        "db": {"ok": db_ok, "detail": db_detail},
    }
