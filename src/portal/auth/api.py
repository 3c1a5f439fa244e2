from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response  # type: ignore[import-not-found]
from fastapi.responses import JSONResponse, RedirectResponse  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]
from starlette import status  # type: ignore[import-not-found]

from portal.auth.depends import current_session_optional, get_auth_service
from portal.auth.models import User
from portal.auth.schemas import MeResponse, UserPublic
from portal.auth.service import AuthService
from portal.auth.sessions import AuthSession, SessionCookie
from portal.auth.validation import validate_credentials
from portal.commons.depends import database_session
from portal.core.settings import settings

router = APIRouter(prefix="/api", tags=["auth"])


def _set_session_cookie(resp: Response, cookie: SessionCookie) -> None:
    resp.set_cookie(key=cookie.name, value=cookie.value, **cookie.attributes)


@router.post("/signup")
async def signup(
    request: Request,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> RedirectResponse:
    # Raw form values: validation owns the type checks, not pydantic.
    form = await request.form()
    username, password = validate_credentials(form.get("username"), form.get("password"))

    _, cookie = await svc.signup(session, username=username, password=password)

    resp = RedirectResponse(
        url=settings.SIGNUP_REDIRECT_PATH, status_code=status.HTTP_302_FOUND
    )
    _set_session_cookie(resp, cookie)
    return resp


@router.get("/me", response_model=MeResponse)
async def me(
    svc: Annotated[AuthService, Depends(get_auth_service)],
    current: Annotated[
        tuple[AuthSession, User] | None, Depends(current_session_optional)
    ],
) -> JSONResponse:
    if current is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )
    auth_session, user = current
    data = MeResponse(user=UserPublic(id=user.id, username=user.username)).model_dump(
        mode="json"
    )
    resp = JSONResponse(status_code=status.HTTP_200_OK, content=data)
    if auth_session.fresh:
        _set_session_cookie(resp, svc.issuer.create_session_cookie(auth_session.id))
    return resp


@router.post("/logout")
async def logout(
    request: Request,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[AuthService, Depends(get_auth_service)],
) -> RedirectResponse:
    session_id = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if session_id:
        cookie = await svc.logout(session, session_id=session_id)
    else:
        cookie = svc.issuer.create_blank_session_cookie()
    resp = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    _set_session_cookie(resp, cookie)
    return resp
