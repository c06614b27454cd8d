"""Exceptions raised by the repository layer.

Errors coming from the OpenSearch client itself (``opensearchpy.exceptions``)
are never wrapped; only failures detected locally are defined here.
"""

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository errors."""


class InvalidDataAccessApiUsageError(RepositoryError, ValueError):
    """Raised when a repository method is called in a way it cannot support."""


class EntityTypeResolutionError(InvalidDataAccessApiUsageError):
    """Raised when a repository cannot determine which entity type it manages."""


class BulkIndexError(RepositoryError):
    """Raised when one or more items of a bulk request were rejected."""

    def __init__(self, message: str, failures: dict[str, Any]) -> None:
        super().__init__(message)
        self.failures = failures


class SearchBackendConnectionError(RepositoryError):
    """Raised when the OpenSearch cluster cannot be reached or denies access."""
