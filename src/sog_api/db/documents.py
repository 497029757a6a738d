"""
sog_api.db.documents

Mapping between wire schemas and stored MongoDB documents.

Responsibilities:
- Parse identifier strings into ObjectIds (strict 24-char hex).
- Build insert documents (timestamps + defaults + schema fields) and `$set` patches.
- Project stored documents back into public entity models.
- Recognize duplicate-key failures by server error code.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, TypeVar

from bson import ObjectId
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError
from pymongo.errors import OperationFailure, PyMongoError

from sog_api.errors import InvalidIdError, SerializationError
from sog_api.schemas.common import Entity

EntityT = TypeVar("EntityT", bound=Entity)

# E11000 and its legacy/update-path variants.
DUPLICATE_KEY_CODES = frozenset({11000, 11001, 12582})

CREATED_AT = "createdAt"
UPDATED_AT = "updatedAt"


def utcnow() -> datetime:
    # BSON datetimes hold milliseconds; truncate so read-back equals what was written.
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def parse_object_id(id: str) -> ObjectId:
    # ObjectId.is_valid also accepts 12-byte strings; only the hex form is a public id.
    if not isinstance(id, str) or len(id) != 24 or not ObjectId.is_valid(id):
        raise InvalidIdError(str(id))
    return ObjectId(id)


def _dump(body: BaseModel, **kwargs: Any) -> dict[str, Any]:
    try:
        return body.model_dump(mode="python", by_alias=True, **kwargs)
    except PydanticSerializationError as exc:
        raise SerializationError(str(exc)) from exc


def create_document(
    body: BaseModel, *, defaults: Mapping[str, Any], now: datetime
) -> dict[str, Any]:
    """
    Insert document for a Create schema.

    Both timestamps are the same instant. Every key in `defaults` is written as a
    concrete value when the schema leaves it unset or null.
    """

    fields = _dump(body)
    for name, value in defaults.items():
        if fields.get(name) is None:
            fields[name] = value
    return {CREATED_AT: now, UPDATED_AT: now, **fields}


def patch_document(body: BaseModel, *, now: datetime) -> dict[str, Any]:
    # Merge-patch: only fields the caller supplied with a non-null value.
    fields = _dump(body, exclude_unset=True, exclude_none=True)
    fields.pop(CREATED_AT, None)
    fields[UPDATED_AT] = now
    return fields


def to_entity(document: Mapping[str, Any], entity_type: type[EntityT]) -> EntityT:
    data = {key: value for key, value in document.items() if key != "_id"}
    data["id"] = str(document["_id"])
    try:
        return entity_type.model_validate(data)
    except ValidationError as exc:
        raise SerializationError(
            f"stored document {data['id']} does not match {entity_type.__name__}: {exc}"
        ) from exc


def is_duplicate_key(exc: PyMongoError) -> bool:
    return isinstance(exc, OperationFailure) and exc.code in DUPLICATE_KEY_CODES


def duplicate_key_value(exc: PyMongoError, field: str, fallback: Any) -> Any:
    # Servers >= 4.2 report the offending key in `keyValue`.
    key_value = (getattr(exc, "details", None) or {}).get("keyValue")
    if isinstance(key_value, Mapping) and field in key_value:
        return key_value[field]
    return fallback


# --- Module Notes -----------------------------------------------------------
# Nothing here performs I/O; the repository owns every store round trip.
