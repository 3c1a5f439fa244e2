from __future__ import annotations

from pydantic import BaseModel


class UserPublic(BaseModel):
    id: str
    username: str


class MeResponse(BaseModel):
    user: UserPublic
