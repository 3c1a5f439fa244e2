from fastapi import FastAPI

from portal.auth.api import router as auth_router
from portal.health.api import router as health_router


def configure_routers(app: FastAPI) -> FastAPI:
    app.include_router(auth_router)
    app.include_router(health_router)
    return app
