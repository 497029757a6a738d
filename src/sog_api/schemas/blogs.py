"""
sog_api.schemas.blogs

Blog post wire schemas.

`published` and `category` are optional on create; the blog repository fills
them with concrete defaults before the document is written.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from sog_api.schemas.common import Entity, WireModel


class CreateBlogSchema(WireModel):
    title: str = Field(min_length=1)
    summary: str
    content: str
    category: str | None = None
    published: bool | None = None


class UpdateBlogSchema(WireModel):
    title: str | None = Field(default=None, min_length=1)
    summary: str | None = None
    content: str | None = None
    category: str | None = None
    published: bool | None = None


class BlogResponse(Entity):
    title: str
    summary: str
    content: str
    category: str
    published: bool


class BlogData(BaseModel):
    blog: BlogResponse


class SingleBlogResponse(BaseModel):
    status: Literal["success"] = "success"
    data: BlogData


class BlogListResponse(BaseModel):
    status: Literal["success"] = "success"
    results: int
    blogs: list[BlogResponse]
