"""
sog_api.db.repository

Generic document repository, parameterized by entity kind.

Responsibilities:
- Paginated listing, create with uniqueness enforcement and read-back, point lookup,
  merge-patch update, and delete over a single collection.
- Translate pymongo failures into the `sog_api.errors` taxonomy.

Operations are single store round trips (two for create: insert, then read-back).
Instances hold no per-request state and are shared across concurrent requests.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from bson.errors import InvalidDocument
from pydantic import BaseModel
from pymongo import ASCENDING, ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from sog_api.db.documents import (
    create_document,
    duplicate_key_value,
    is_duplicate_key,
    parse_object_id,
    patch_document,
    to_entity,
    utcnow,
)
from sog_api.errors import (
    DuplicateKeyError,
    NotFoundError,
    SerializationError,
    StorageQueryError,
)
from sog_api.observability.logging import get_logger
from sog_api.schemas.common import Entity

CreateT = TypeVar("CreateT", bound=BaseModel)
UpdateT = TypeVar("UpdateT", bound=BaseModel)
EntityT = TypeVar("EntityT", bound=Entity)

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class EntityKind(Generic[EntityT]):
    """
    What differs between entity kinds:
    - `name`: used in error messages and logs ("user", "blog")
    - `key_field`: the single uniquely-indexed field
    - `entity_type`: public projection model
    - `defaults`: fields always written on create, filled when the schema leaves them null
    """

    name: str
    key_field: str
    entity_type: type[EntityT]
    defaults: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Page(Generic[EntityT]):
    items: list[EntityT]

    @property
    def results(self) -> int:
        # Size of this page, not of the collection.
        return len(self.items)


class DocumentRepo(Generic[CreateT, UpdateT, EntityT]):
    def __init__(
        self, collection: AsyncCollection[dict[str, Any]], kind: EntityKind[EntityT]
    ) -> None:
        self._collection = collection
        self._kind = kind
        self._log = log.bind(kind=kind.name, collection=collection.name)

    @property
    def kind(self) -> EntityKind[EntityT]:
        return self._kind

    async def list(self, *, limit: int, page: int) -> Page[EntityT]:
        # Natural order; stable only while the collection is unmodified.
        offset = (page - 1) * limit
        with self._storage_errors("find"):
            cursor = self._collection.find({}, skip=offset, limit=limit)
            documents = await cursor.to_list(length=None)
        return Page(items=[self._to_entity(doc) for doc in documents])

    async def create(self, body: CreateT) -> EntityT:
        # Idempotent; a failure here aborts before anything is written.
        with self._storage_errors("create_index"):
            await self._collection.create_index(
                [(self._kind.key_field, ASCENDING)], unique=True
            )

        document = create_document(body, defaults=self._kind.defaults, now=utcnow())
        key_value = document.get(self._kind.key_field)

        with self._storage_errors("insert_one", key_value=key_value):
            result = await self._collection.insert_one(document)
        new_id = result.inserted_id

        with self._storage_errors("find_one"):
            stored = await self._collection.find_one({"_id": new_id})
        if stored is None:
            # Insert acknowledged but not readable: consistency anomaly, not a client error.
            self._log.error("readback_missing", id=str(new_id))
            raise NotFoundError(self._kind.name, str(new_id))

        self._log.info("document_created", id=str(new_id))
        return self._to_entity(stored)

    async def get(self, id: str) -> EntityT:
        oid = parse_object_id(id)
        with self._storage_errors("find_one"):
            stored = await self._collection.find_one({"_id": oid})
        if stored is None:
            raise NotFoundError(self._kind.name, id)
        return self._to_entity(stored)

    async def update(self, id: str, body: UpdateT) -> EntityT:
        oid = parse_object_id(id)
        patch = patch_document(body, now=utcnow())

        with self._storage_errors(
            "find_one_and_update", key_value=patch.get(self._kind.key_field)
        ):
            updated = await self._collection.find_one_and_update(
                {"_id": oid},
                {"$set": patch},
                return_document=ReturnDocument.AFTER,
            )
        if updated is None:
            raise NotFoundError(self._kind.name, id)

        self._log.info("document_updated", id=id, fields=sorted(patch))
        return self._to_entity(updated)

    async def delete(self, id: str) -> None:
        oid = parse_object_id(id)
        with self._storage_errors("delete_one"):
            result = await self._collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise NotFoundError(self._kind.name, id)
        self._log.info("document_deleted", id=id)

    def _to_entity(self, document: Mapping[str, Any]) -> EntityT:
        return to_entity(document, self._kind.entity_type)

    @contextmanager
    def _storage_errors(self, operation: str, *, key_value: Any = None) -> Iterator[None]:
        # Duplicate-key detection applies only to writes that carry the key field.
        try:
            yield
        except InvalidDocument as exc:
            raise SerializationError(str(exc)) from exc
        except PyMongoError as exc:
            if key_value is not None and is_duplicate_key(exc):
                value = duplicate_key_value(exc, self._kind.key_field, key_value)
                self._log.warning(
                    "duplicate_key_rejected", field=self._kind.key_field, value=value
                )
                raise DuplicateKeyError(self._kind.name, self._kind.key_field, value) from exc
            self._log.error("storage_query_failed", operation=operation, error=str(exc))
            raise StorageQueryError(operation, str(exc)) from exc


# --- Module Notes -----------------------------------------------------------
# Entity kinds bind this class in `db.repositories.users` / `db.repositories.blogs`.
