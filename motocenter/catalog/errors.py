"""Catalog error types."""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog failures."""


class InvalidArgument(CatalogError, ValueError):
    pass


class NotFound(CatalogError):
    def __init__(self, record_id: str, status: int | None = None) -> None:
        self.record_id = record_id
        self.status = status
        detail = f"status {status}" if status is not None else "request failed"
        super().__init__(f"Record not found: {record_id} ({detail})")


class SnapshotError(CatalogError):
    """The fallback snapshot is missing or malformed."""
