"""Base repository class for OpenSearch resource repositories."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from opensearchpy import OpenSearch

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Abstract base class for repositories of OpenSearch resources.

    Repositories handle all persistence operations for the resources they
    return. The resources delegate back to their repository for lifecycle
    operations such as delete.

    Type Parameters:
        T: The type of resource this repository manages
    """

    def __init__(self, *, client: OpenSearch) -> None:
        """Initialize the repository with an OpenSearch client."""
        self._client = client

    @abstractmethod
    def create(self, **_: Any) -> T:
        """Create a new resource and return a domain model instance."""

    @abstractmethod
    def get(self, **_: Any) -> T | None:
        """Get a resource by identifier and return a domain model instance."""

    @abstractmethod
    def delete(self, *_: Any, **__: Any) -> Any:
        """Delete a resource."""
