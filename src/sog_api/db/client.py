"""
sog_api.db.client

Async MongoDB client helpers.

Responsibilities:
- Create the async client from settings.
- Resolve the configured database.
- Provide a readiness ping and an explicit close for shutdown.
"""

from __future__ import annotations

from typing import Any

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from sog_api.settings import Settings


def create_client(settings: Settings) -> AsyncMongoClient[dict[str, Any]]:
    # The client connects lazily; construction never blocks on the server.
    # tz_aware=True so stored timestamps come back as UTC-aware datetimes.
    return AsyncMongoClient(
        settings.mongodb_url,
        appname=settings.mongo_database,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.mongo_server_selection_timeout_ms,
    )


def get_database(
    client: AsyncMongoClient[dict[str, Any]], settings: Settings
) -> AsyncDatabase[dict[str, Any]]:
    return client[settings.mongo_database]


async def ping(database: AsyncDatabase[dict[str, Any]]) -> None:
    await database.command("ping")


async def close_client(client: AsyncMongoClient[dict[str, Any]]) -> None:
    await client.close()


# --- Module Notes -----------------------------------------------------------
# The API layer owns the client lifecycle (`sog_api.api.app.create_app`).
