"""Document repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection, Iterable
from typing import Any, Generic, TypeVar

from search_repo.opensearch.entities import Page, PageRequest, SearchQuery, Sort

T = TypeVar("T")
S = TypeVar("S")
C = TypeVar("C", bound=Collection[Any])


class DocumentRepository(ABC, Generic[T]):
    """CRUD and search operations over the documents of one entity type."""

    @abstractmethod
    def find_one(self, id: str) -> T | None:
        """Return the entity stored under ``id``, or None."""

    @abstractmethod
    def find_all(
        self, *, sort: Sort | None = None, pageable: PageRequest | None = None
    ) -> Page[T]:
        """Return every entity, optionally sorted, or a single page of them."""

    @abstractmethod
    def find_all_by_id(self, ids: Iterable[str]) -> Page[T]:
        """Return the entities whose id is one of ``ids``."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored entities."""

    @abstractmethod
    def save(self, entity: S) -> S:
        """Store one entity and return it."""

    @abstractmethod
    def save_all(self, entities: C) -> C:
        """Store a collection of entities in one request and return it."""

    def index(self, entity: S) -> S:
        """Alias of :meth:`save`."""
        return self.save(entity)

    @abstractmethod
    def exists(self, id: str) -> bool:
        """Check whether an entity is stored under ``id``."""

    @abstractmethod
    def search(
        self, query: SearchQuery | dict[str, Any], pageable: PageRequest | None = None
    ) -> Page[T]:
        """Search with a query clause or a complete search query."""

    @abstractmethod
    def search_similar(
        self,
        entity: T,
        pageable: PageRequest | None = None,
        fields: list[str] | None = None,
    ) -> Page[T]:
        """Return entities similar to ``entity``."""

    @abstractmethod
    def delete(self, id: str) -> None:
        """Delete the entity stored under ``id``."""

    @abstractmethod
    def delete_entity(self, entity: T) -> None:
        """Delete one entity."""

    @abstractmethod
    def delete_entities(self, entities: Iterable[T]) -> None:
        """Delete several entities, one at a time."""

    @abstractmethod
    def delete_all(self) -> None:
        """Delete every stored entity."""
