"""Type definitions and interfaces for the search repository."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel

from search_repo.opensearch.entities import (
    DeleteQuery,
    GetQuery,
    IndexQuery,
    MoreLikeThisQuery,
    Page,
    SearchQuery,
)

T = TypeVar("T", bound=BaseModel)


class IReporter(ABC):
    """Reporter interface."""

    @abstractmethod
    def on_message(self, *messages: str) -> None:
        """On message callback."""

    @abstractmethod
    def on_input(self, message: str) -> str:
        """On input callback."""

    @abstractmethod
    def start_progress(self, total: int) -> None:
        """On start progress callback."""

    @abstractmethod
    def stop_progress(self) -> None:
        """On stop progress callback."""

    @abstractmethod
    def on_progress(self, value: int) -> None:
        """On progress callback."""


@dataclass
class SearchRequest:
    """Search request ready to be sent to OpenSearch."""

    index: Any
    body: Any
    params: Any


class ISearchOperations(ABC):
    """Operations a document repository delegates to.

    Implementations talk to the search cluster; repositories only build the
    query objects and decide when to refresh.
    """

    @abstractmethod
    def create_index(self, entity_type: type[BaseModel]) -> bool:
        """Create the index of ``entity_type`` unless it exists. Return True if created."""

    @abstractmethod
    def put_mapping(self, entity_type: type[BaseModel]) -> bool:
        """Apply the mapping declared by ``entity_type``. Return True if one was sent."""

    @abstractmethod
    def index_exists(self, entity_type: type[BaseModel]) -> bool:
        """Check whether the index of ``entity_type`` exists."""

    @abstractmethod
    def delete_index(self, entity_type: type[BaseModel]) -> bool:
        """Delete the index of ``entity_type``. Return True if it existed."""

    @abstractmethod
    def query_for_object(self, query: GetQuery, entity_type: type[T]) -> T | None:
        """Fetch one entity by id, or None when no document has that id."""

    @abstractmethod
    def query_for_page(self, query: SearchQuery, entity_type: type[T]) -> Page[T]:
        """Run a search and return one page of entities."""

    @abstractmethod
    def count(self, query: SearchQuery, entity_type: type[BaseModel]) -> int:
        """Count the documents matching the query."""

    @abstractmethod
    def index(self, query: IndexQuery) -> str:
        """Write one entity and return its document id."""

    @abstractmethod
    def bulk_index(self, queries: Sequence[IndexQuery]) -> list[str]:
        """Write several entities in a single request and return their ids."""

    @abstractmethod
    def delete(
        self, index_name: str, type_name: str, id: str, *, refresh: str | None = None
    ) -> str:
        """Delete the document stored under ``id``."""

    @abstractmethod
    def delete_by_query(self, query: DeleteQuery, entity_type: type[BaseModel]) -> int:
        """Delete every matching document and return how many were deleted."""

    @abstractmethod
    def more_like_this(
        self, query: MoreLikeThisQuery, entity_type: type[T]
    ) -> Page[T]:
        """Return entities similar to the referenced document."""

    @abstractmethod
    def refresh(self, index_name: str) -> None:
        """Make every acknowledged write visible to searches."""
