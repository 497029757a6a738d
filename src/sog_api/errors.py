"""
sog_api.errors

Typed error taxonomy for the repository layer.

Responsibilities:
- Give every repository failure a stable code and the HTTP status the API maps it to.
- Keep store-client exception types out of callers (they are chained, not exposed).
"""

from __future__ import annotations


class RepositoryError(Exception):
    """Base class for all repository failures."""

    code = "REPOSITORY_ERROR"
    http_status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidIdError(RepositoryError):
    """The identifier is not a well-formed ObjectId. Raised before any store call."""

    code = "INVALID_ID"
    http_status = 400

    def __init__(self, id: str) -> None:
        super().__init__(f"Invalid ID: {id}")
        self.id = id


class NotFoundError(RepositoryError):
    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, kind: str, id: str) -> None:
        super().__init__(f"No {kind} with ID: {id}")
        self.kind = kind
        self.id = id


class DuplicateKeyError(RepositoryError):
    code = "DUPLICATE_KEY"
    http_status = 409

    def __init__(self, kind: str, field: str, value: object) -> None:
        super().__init__(f"A {kind} with {field} {value!r} already exists")
        self.kind = kind
        self.field = field
        self.value = value


class StorageQueryError(RepositoryError):
    """Any other store-layer failure (transport, timeout, rejected query)."""

    code = "STORAGE_QUERY_ERROR"
    http_status = 500

    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(f"MongoDB {operation} failed: {detail}")
        self.operation = operation
        self.detail = detail


class SerializationError(RepositoryError):
    """A schema could not be converted to (or from) a stored document."""

    code = "SERIALIZATION_ERROR"
    http_status = 500

    def __init__(self, detail: str) -> None:
        super().__init__(f"Document serialization failed: {detail}")
        self.detail = detail


# --- Module Notes -----------------------------------------------------------
# None of these are retried by the repository; retry policy belongs to callers.
