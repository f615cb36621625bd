"""Error taxonomy for service and storage failures.

Field validation uses Django's `ValidationError`. Everything raised by the
storage port is normalized into the classes below so views never inspect
database-driver exception shapes.
"""

from __future__ import annotations

from typing import Final

UNDEFINED_TABLE_CODE: Final[str] = "42P01"
UNDEFINED_COLUMN_CODE: Final[str] = "42703"

SCHEMA_MISSING_CODES: Final[frozenset[str]] = frozenset({UNDEFINED_TABLE_CODE, UNDEFINED_COLUMN_CODE})
SCHEMA_MISSING_MESSAGES: Final[tuple[str, ...]] = (
    "does not exist",
    "Could not find the",
    "no such table",
    "no such column",
)


class NexusError(Exception):
    """Base class for domain errors reported to the user."""


class NotFoundError(NexusError):
    """Raised when a target row is absent or not owned by the caller."""


class InvalidReferenceError(NexusError):
    """Raised when a foreign key names a row that does not exist."""


class DefinitionInUseError(InvalidReferenceError):
    """Raised when deleting a definition that player-owned rows still reference."""


class StoreError(NexusError):
    """A storage failure that is not a schema problem.

    Attributes:
        code: Machine-readable code from the backend when available.
        collection: Name of the collection the operation targeted.
    """

    def __init__(self, message: str, *, code: str | None = None, collection: str = "") -> None:
        """Initialize the error.

        Args:
            message: Backend error message.
            code: Structured backend error code, if any.
            collection: Table/collection name the operation targeted.
        """

        super().__init__(message)
        self.code = code
        self.collection = collection


class SchemaMissingError(StoreError):
    """The backend reports an unknown table or column; setup is required."""


def is_schema_missing(message: str, code: str | None) -> bool:
    """Return True when a backend failure means a table or column is missing.

    Args:
        message: Backend error message.
        code: Structured backend error code (SQLSTATE), if any.

    Returns:
        True for undefined-table/undefined-column failures.
    """

    if code is not None and code in SCHEMA_MISSING_CODES:
        return True
    return any(signal in (message or "") for signal in SCHEMA_MISSING_MESSAGES)


def classify_store_failure(exc: BaseException, *, collection: str = "") -> StoreError:
    """Normalize a database exception into the storage taxonomy.

    Args:
        exc: Exception raised by the database layer.
        collection: Table/collection name the operation targeted.

    Returns:
        A SchemaMissingError or StoreError carrying the original message and
        code.
    """

    code = _error_code(exc)
    message = str(exc)
    if is_schema_missing(message, code):
        return SchemaMissingError(message, code=code, collection=collection)
    return StoreError(message, code=code, collection=collection)


def _error_code(exc: BaseException) -> str | None:
    """Return a SQLSTATE-style code from the exception or its driver cause."""

    for candidate in (exc, exc.__cause__):
        if candidate is None:
            continue
        for attr in ("pgcode", "sqlstate", "code"):
            value = getattr(candidate, attr, None)
            if isinstance(value, str) and value:
                return value
    return None
