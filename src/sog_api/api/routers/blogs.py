"""
sog_api.api.routers.blogs

Blog post CRUD endpoints (mounted under `/api/blog`).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from sog_api.api.deps import blog_repo_dep, settings_dep
from sog_api.db.repositories.blogs import BlogRepo
from sog_api.schemas.blogs import (
    BlogData,
    BlogListResponse,
    CreateBlogSchema,
    SingleBlogResponse,
    UpdateBlogSchema,
)
from sog_api.settings import Settings

router = APIRouter(prefix="/api/blog", tags=["blog"])


@router.get("", response_model=BlogListResponse)
async def list_blogs(
    limit: int | None = Query(default=None, ge=1),
    page: int = Query(default=1, ge=1),
    repo: BlogRepo = Depends(blog_repo_dep),
    settings: Settings = Depends(settings_dep),
) -> BlogListResponse:
    result = await repo.list(limit=limit or settings.default_page_limit, page=page)
    return BlogListResponse(results=result.results, blogs=result.items)


@router.post("/new", response_model=SingleBlogResponse, status_code=HTTP_201_CREATED)
async def create_blog(
    body: CreateBlogSchema,
    repo: BlogRepo = Depends(blog_repo_dep),
) -> SingleBlogResponse:
    blog = await repo.create(body)
    return SingleBlogResponse(data=BlogData(blog=blog))


@router.get("/{blog_id}", response_model=SingleBlogResponse)
async def get_blog(
    blog_id: str,
    repo: BlogRepo = Depends(blog_repo_dep),
) -> SingleBlogResponse:
    return SingleBlogResponse(data=BlogData(blog=await repo.get(blog_id)))


@router.patch("/{blog_id}", response_model=SingleBlogResponse)
async def edit_blog(
    blog_id: str,
    body: UpdateBlogSchema,
    repo: BlogRepo = Depends(blog_repo_dep),
) -> SingleBlogResponse:
    return SingleBlogResponse(data=BlogData(blog=await repo.update(blog_id, body)))


@router.delete("/{blog_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_blog(
    blog_id: str,
    repo: BlogRepo = Depends(blog_repo_dep),
) -> Response:
    await repo.delete(blog_id)
    return Response(status_code=HTTP_204_NO_CONTENT)
