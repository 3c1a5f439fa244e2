from __future__ import annotations

import sqlalchemy as sa  # type: ignore[import-not-found]

from portal.core.db import database_manager


async def check_db() -> tuple[bool, str | None]:
    try:
        await database_manager.initialize()
        async with database_manager.session() as session:
            await session.execute(sa.text("SELECT 1"))
        return True, None
    except Exception as exc:
        # Health reports the failure instead of raising it.
        return False, str(exc)
