"""Base entity class for OpenSearch domain models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from search_repo.opensearch.repositories.base_repository import BaseRepository

T = TypeVar("T")


class BaseEntity(ABC, Generic[T]):
    """Abstract base class for OpenSearch resources managed by a repository.

    Such entities hold their own state only and hand every persistence
    operation back to the repository that produced them.
    """

    _repository: BaseRepository[T]

    @abstractmethod
    def delete(self) -> None:
        """Delete this entity through its repository."""
