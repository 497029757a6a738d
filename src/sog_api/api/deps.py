"""
sog_api.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, the database handle and repositories.
- Encapsulate app.state access patterns.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from pymongo.asynchronous.database import AsyncDatabase

from sog_api.db.repositories.blogs import BlogRepo
from sog_api.db.repositories.users import UserRepo
from sog_api.settings import Settings, get_settings


def settings_dep() -> Settings:
    return get_settings()


# The objects below are created on app startup in `sog_api.api.app.create_app`.


def database_dep(request: Request) -> AsyncDatabase[dict[str, Any]]:
    return request.app.state.database  # type: ignore[no-any-return]


def user_repo_dep(request: Request) -> UserRepo:
    return request.app.state.user_repo  # type: ignore[no-any-return]


def blog_repo_dep(request: Request) -> BlogRepo:
    return request.app.state.blog_repo  # type: ignore[no-any-return]


# --- Module Notes -----------------------------------------------------------
# Repositories are stateless, so one instance per kind serves every request.
# Tests swap them through `app.dependency_overrides`.
