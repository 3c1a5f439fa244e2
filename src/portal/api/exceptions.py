from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette import status

from portal.commons.exceptions import (
    BaseCoreException,
    BaseServiceConflictException,
    BaseServiceException,
    BaseServiceNotFoundException,
    BaseServiceUnProcessableException,
    BaseServiceValidationException,
)
from portal.commons.logging import logger


def _envelope(request: Request, code: int, message: str, details: str | None) -> dict:
    return {
        "exception": {
            "code": code,
            "message": message,
            "details": details,
            "path": request.url.path,
            "method": request.method,
        }
    }


def configure_global_exception_handlers(app: FastAPI) -> FastAPI:
    @app.exception_handler(BaseServiceException)
    async def service_exception_handler(
        request: Request, exc: BaseServiceException
    ) -> JSONResponse | PlainTextResponse:
        # Validation messages are meant for the person filling in the form.
        if isinstance(exc, BaseServiceValidationException):
            return PlainTextResponse(
                exc.details or exc.message, status_code=status.HTTP_400_BAD_REQUEST
            )

        if isinstance(exc, BaseServiceNotFoundException):
            code = status.HTTP_404_NOT_FOUND
        elif isinstance(exc, BaseServiceUnProcessableException):
            code = status.HTTP_422_UNPROCESSABLE_CONTENT
        elif isinstance(exc, BaseServiceConflictException):
            code = status.HTTP_409_CONFLICT
        else:
            code = status.HTTP_400_BAD_REQUEST

        return JSONResponse(
            status_code=code,
            content=_envelope(request, code, exc.message, exc.details),
        )

    @app.exception_handler(BaseCoreException)
    async def core_exception_handler(
        request: Request, exc: BaseCoreException
    ) -> JSONResponse:
        logger.exception("Unhandled core exception", exc_info=exc)
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return JSONResponse(
            status_code=code,
            content=_envelope(request, code, exc.message, exc.details),
        )

    return app
