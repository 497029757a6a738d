"""
tests.conftest

Shared fixtures: fake collections, repositories, and an app wired to them.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from sog_api.api.app import create_app
from sog_api.api.deps import blog_repo_dep, database_dep, settings_dep, user_repo_dep
from sog_api.db.repositories.blogs import BlogRepo
from sog_api.db.repositories.users import UserRepo
from sog_api.settings import Settings
from tests.fake_mongo import FakeCollection, FakeDatabase


@pytest.fixture
def users_collection() -> FakeCollection:
    return FakeCollection("users")


@pytest.fixture
def blogs_collection() -> FakeCollection:
    return FakeCollection("blogs")


@pytest.fixture
def fake_database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def user_repo(users_collection: FakeCollection) -> UserRepo:
    return UserRepo(users_collection)  # type: ignore[arg-type]


@pytest.fixture
def blog_repo(blogs_collection: FakeCollection) -> BlogRepo:
    return BlogRepo(blogs_collection)  # type: ignore[arg-type]


@pytest.fixture
def app(user_repo: UserRepo, blog_repo: BlogRepo, fake_database: FakeDatabase) -> FastAPI:
    # Startup is never run: no real client is created; state comes from overrides.
    settings = Settings(env="test", default_page_limit=10)
    app = create_app(settings=settings)
    app.dependency_overrides[settings_dep] = lambda: settings
    app.dependency_overrides[user_repo_dep] = lambda: user_repo
    app.dependency_overrides[blog_repo_dep] = lambda: blog_repo
    app.dependency_overrides[database_dep] = lambda: fake_database
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
