"""
sog_api.api.errors

Global exception handlers.

Responsibilities:
- Map `RepositoryError` subclasses to their HTTP status with a `{status, code, message}` body.
- Render request validation failures in the same envelope.
- Never leak store internals in 5xx bodies (they are logged instead).
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from sog_api.errors import RepositoryError
from sog_api.observability.logging import get_logger

log = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RepositoryError)
    async def repository_error_handler(_: Request, exc: RepositoryError) -> JSONResponse:
        if exc.http_status >= HTTP_500_INTERNAL_SERVER_ERROR:
            log.error("repository_error", code=exc.code, error=exc.message)
            body = {"status": "error", "code": exc.code, "message": "Internal server error"}
        else:
            log.info("repository_rejected", code=exc.code, error=exc.message)
            body = {"status": "fail", "code": exc.code, "message": exc.message}
        return JSONResponse(status_code=exc.http_status, content=body)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={
                "status": "fail",
                "code": "VALIDATION_ERROR",
                "message": "Invalid request data",
                "details": [
                    {
                        "field": ".".join(str(loc) for loc in err["loc"]),
                        "message": err["msg"],
                    }
                    for err in exc.errors()
                ],
            },
        )


# --- Module Notes -----------------------------------------------------------
# Unhandled exceptions fall through to Starlette's ServerErrorMiddleware (plain 500).
