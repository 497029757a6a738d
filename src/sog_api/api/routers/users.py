"""
sog_api.api.routers.users

User CRUD endpoints.

Responsibilities:
- Parse query/path/body input and delegate to `UserRepo`.
- Wrap results in the `{status, data: {user}}` / `{status, results, users}` envelopes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from sog_api.api.deps import settings_dep, user_repo_dep
from sog_api.db.repositories.users import UserRepo
from sog_api.schemas.users import (
    CreateUserSchema,
    SingleUserResponse,
    UpdateUserSchema,
    UserData,
    UserListResponse,
)
from sog_api.settings import Settings

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(
    limit: int | None = Query(default=None, ge=1),
    page: int = Query(default=1, ge=1),
    repo: UserRepo = Depends(user_repo_dep),
    settings: Settings = Depends(settings_dep),
) -> UserListResponse:
    result = await repo.list(limit=limit or settings.default_page_limit, page=page)
    return UserListResponse(results=result.results, users=result.items)


@router.post("/new", response_model=SingleUserResponse, status_code=HTTP_201_CREATED)
async def create_user(
    body: CreateUserSchema,
    repo: UserRepo = Depends(user_repo_dep),
) -> SingleUserResponse:
    user = await repo.create(body)
    return SingleUserResponse(data=UserData(user=user))


@router.get("/{user_id}", response_model=SingleUserResponse)
async def get_user(
    user_id: str,
    repo: UserRepo = Depends(user_repo_dep),
) -> SingleUserResponse:
    return SingleUserResponse(data=UserData(user=await repo.get(user_id)))


@router.patch("/{user_id}", response_model=SingleUserResponse)
async def edit_user(
    user_id: str,
    body: UpdateUserSchema,
    repo: UserRepo = Depends(user_repo_dep),
) -> SingleUserResponse:
    return SingleUserResponse(data=UserData(user=await repo.update(user_id, body)))


@router.delete("/{user_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    repo: UserRepo = Depends(user_repo_dep),
) -> Response:
    await repo.delete(user_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
