"""Failure kinds raised by the monday.com client."""

from __future__ import annotations

from typing import Any

from work_mgmt_client_interface.client import (
    BoardNotFoundError as BaseBoardNotFoundError,
    InvalidItemIDError as BaseInvalidItemIDError,
)


class MondayError(Exception):
    """Base class for every monday.com client failure."""


class TransportError(MondayError):
    """Raised for network failures and non-success HTTP responses."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RemoteOperationError(MondayError):
    """Raised when monday returns a GraphQL ``errors`` array for a well-formed request."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        messages = "; ".join(
            str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors
        ) or "unknown error"
        super().__init__(f"monday GraphQL errors: {messages}")
        self.errors = errors


class SerializationError(MondayError):
    """Raised when a column-values mapping cannot be JSON-encoded."""


class InvalidItemIDError(MondayError, BaseInvalidItemIDError):
    """Raised when a string item id is not numeric where an integer id is required."""


class BoardNotFoundError(MondayError, BaseBoardNotFoundError):
    """Raised when a requested board does not exist."""


# ---------------------------------------------------------------------------
# Column value translation failures
# ---------------------------------------------------------------------------

class ColumnValueError(MondayError):
    """Base class for failures translating one column value."""


class MetadataCorruptError(ColumnValueError):
    """Raised when a column's settings blob does not have the shape its type tag implies."""

    def __init__(self, message: str, column_id: str | None = None) -> None:
        super().__init__(message)
        self.column_id = column_id


class LabelNotFoundError(ColumnValueError):
    """Raised when an index or id has no entry in the column's label settings."""

    def __init__(self, label_ref: str) -> None:
        super().__init__(f"No label for index/id {label_ref!r}")
        self.label_ref = label_ref


class MalformedValueError(ColumnValueError):
    """Raised when a raw column value is not the JSON shape its type tag implies."""
