"""
sog_api.api.app

FastAPI app factory for the SOG document service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Open and close the shared MongoDB client; build one repository per entity kind.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from fastapi import FastAPI

from sog_api import __version__
from sog_api.api.errors import register_error_handlers
from sog_api.api.routers.blogs import router as blogs_router
from sog_api.api.routers.health import router as health_router
from sog_api.api.routers.users import router as users_router
from sog_api.db.client import close_client, create_client, get_database
from sog_api.db.repositories.blogs import BlogRepo
from sog_api.db.repositories.users import UserRepo
from sog_api.observability.logging import configure_logging, get_logger
from sog_api.observability.middleware import RequestContextMiddleware
from sog_api.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    app = FastAPI(
        title="SOG Users & Blog API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(users_router)
    app.include_router(blogs_router)

    @app.on_event("startup")
    async def _startup() -> None:
        # The client connects lazily; indexes are created on first create per kind.
        client = create_client(settings)
        database = get_database(client, settings)
        app.state.mongo_client = client
        app.state.database = database
        app.state.user_repo = UserRepo(database[settings.users_collection])
        app.state.blog_repo = BlogRepo(database[settings.blogs_collection])
        log.info("startup", env=settings.env, database=settings.mongo_database)

    @app.on_event("shutdown")
    async def _shutdown() -> None:
        client = getattr(app.state, "mongo_client", None)
        if client is not None:
            await close_client(client)
        log.info("shutdown")

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; document semantics stay in `sog_api.db`.
