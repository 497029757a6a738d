"""
sog_api.db.repositories.blogs

Repository for blog post documents.

Responsibilities:
- Enforce unique `title`.
- Always persist `published` (false) and `category` ("") so read-back never sees them absent.
"""

from __future__ import annotations

from typing import Any

from pymongo.asynchronous.collection import AsyncCollection

from sog_api.db.repository import DocumentRepo, EntityKind
from sog_api.schemas.blogs import BlogResponse, CreateBlogSchema, UpdateBlogSchema

BLOG_KIND: EntityKind[BlogResponse] = EntityKind(
    name="blog",
    key_field="title",
    entity_type=BlogResponse,
    defaults={"published": False, "category": ""},
)


class BlogRepo(DocumentRepo[CreateBlogSchema, UpdateBlogSchema, BlogResponse]):
    def __init__(self, collection: AsyncCollection[dict[str, Any]]) -> None:
        super().__init__(collection, BLOG_KIND)


# --- Module Notes -----------------------------------------------------------
# Defaults apply on create only; a PATCH with `published: null` leaves the field as stored.
