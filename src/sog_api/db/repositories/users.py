"""
sog_api.db.repositories.users

Repository for user documents (unique on `name`).
"""

from __future__ import annotations

from typing import Any

from pymongo.asynchronous.collection import AsyncCollection

from sog_api.db.repository import DocumentRepo, EntityKind
from sog_api.schemas.users import CreateUserSchema, UpdateUserSchema, UserResponse

USER_KIND: EntityKind[UserResponse] = EntityKind(
    name="user",
    key_field="name",
    entity_type=UserResponse,
)


class UserRepo(DocumentRepo[CreateUserSchema, UpdateUserSchema, UserResponse]):
    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        super().__init__(collection, USER_KIND)
