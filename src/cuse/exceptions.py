"""Custom exception hierarchy for cuse.

These exceptions allow callers to discriminate error categories
and handle them appropriately while preserving the original context.
All search errors are caller configuration or input mistakes; none are
retried internally.
"""

from __future__ import annotations

from typing import Any


class CuseError(Exception):
    """Base class for all cuse exceptions."""


class ConfigError(CuseError):
    """Raised when configuration loading, validation or wiring fails."""


class StorageError(CuseError):
    """Raised when the storage layer encounters an error (DB, mapping, etc.)."""


class SearchError(CuseError):
    """Base class for search registration and query errors."""


class NotConfiguredError(SearchError):
    """Raised when a type has no registered strategy or converter."""

    def __init__(self, configured_type: Any, message: str) -> None:
        super().__init__(message)
        self.configured_type = configured_type


class NotConfiguredIndexingStrategyError(NotConfiguredError):
    """Raised when a domain type has no registered indexing strategy."""

    def __init__(self, entity_type: Any) -> None:
        name = getattr(entity_type, "__name__", repr(entity_type))
        super().__init__(entity_type, f"No indexing strategy configured for {name}")


class NotConfiguredIdConverterError(NotConfiguredError):
    """Raised when an identifier type has no registered converter."""

    def __init__(self, id_type: Any) -> None:
        name = getattr(id_type, "__name__", repr(id_type))
        super().__init__(id_type, f"No id converter configured for {name}")


class InvalidQueryError(SearchError):
    """Base class for queries that must not be sent to the index."""


class EmptyMatcherError(InvalidQueryError):
    """Raised when a field filter value is empty after trimming."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Empty matcher value for field {field!r}")
        self.field = field


class InvalidSearchError(InvalidQueryError):
    """Raised when the combined query string is empty."""

    def __init__(self) -> None:
        super().__init__("Search has neither filters nor a query")


class SearchLimitExceededError(InvalidQueryError):
    """Raised when the requested result limit is above the maximum."""

    def __init__(self, limit: int, maximum: int) -> None:
        super().__init__(f"Search limit {limit} exceeds maximum of {maximum}")
        self.limit = limit
        self.maximum = maximum


class NegativeSearchLimitError(InvalidQueryError):
    """Raised when the requested result limit is negative."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"Search limit must not be negative, got {limit}")
        self.limit = limit
