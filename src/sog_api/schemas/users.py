"""
sog_api.schemas.users

User wire schemas.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from sog_api.schemas.common import Entity, WireModel


class CreateUserSchema(WireModel):
    name: str = Field(min_length=1)
    uid: str = Field(min_length=1)


class UpdateUserSchema(WireModel):
    name: str | None = Field(default=None, min_length=1)
    uid: str | None = Field(default=None, min_length=1)


class UserResponse(Entity):
    name: str
    uid: str


class UserData(BaseModel):
    user: UserResponse


class SingleUserResponse(BaseModel):
    status: Literal["success"] = "success"
    data: UserData


class UserListResponse(BaseModel):
    status: Literal["success"] = "success"
    results: int
    users: list[UserResponse]
