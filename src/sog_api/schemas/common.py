"""
sog_api.schemas.common

Shared schema building blocks.

Responsibilities:
- Base model for entities read back from storage (id + timestamps).
- Generic status/message envelope.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    # camelCase aliases match the stored document field names.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Entity(WireModel):
    """
    Public projection of a stored document.
    `id` is the ObjectId rendered as a 24-char hex string.
    """

    id: str
    created_at: datetime
    updated_at: datetime


class GenericResponse(BaseModel):
    status: Literal["success", "fail", "error"]
    message: str


# --- Module Notes -----------------------------------------------------------
# Entity-specific projections extend `Entity` in `schemas.users` / `schemas.blogs`.
