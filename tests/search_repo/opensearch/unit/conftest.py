"""Pytest fixtures for the OpenSearch repository unit tests."""

import itertools
from collections.abc import Generator, Sequence
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from botocore.credentials import Credentials
from pydantic import BaseModel

from search_repo.interfaces import ISearchOperations
from search_repo.null_reporter import NullReporter
from search_repo.opensearch.client import OpenSearchClient
from search_repo.opensearch.entities import (
    DEFAULT_PAGE,
    DeleteQuery,
    Direction,
    EntityInformation,
    GetQuery,
    IndexQuery,
    MoreLikeThisQuery,
    Page,
    PageRequest,
    SearchQuery,
)


class InMemoryOperations(ISearchOperations):
    """Search operations over plain dicts.

    Writes are visible immediately. Every refresh and every per-request
    refresh parameter is recorded so tests can check the refresh policy.
    """

    def __init__(self) -> None:
        self.documents: dict[str, dict[str, dict[str, Any]]] = {}
        self.mappings: dict[str, dict[str, Any]] = {}
        self.refreshed: list[str] = []
        self.write_refreshes: list[Any] = []
        self._ids = itertools.count(1)

    def create_index(self, entity_type: type[BaseModel]) -> bool:
        index_name = EntityInformation(entity_type).index_name
        if index_name in self.documents:
            return False
        self.documents[index_name] = {}
        return True

    def put_mapping(self, entity_type: type[BaseModel]) -> bool:
        information = EntityInformation(entity_type)
        if not information.mapping.properties:
            return False
        self.mappings[information.index_name] = information.mapping.properties
        return True

    def index_exists(self, entity_type: type[BaseModel]) -> bool:
        return EntityInformation(entity_type).index_name in self.documents

    def delete_index(self, entity_type: type[BaseModel]) -> bool:
        return self.documents.pop(EntityInformation(entity_type).index_name, None) is not None

    def refresh(self, index_name: str) -> None:
        self.refreshed.append(index_name)

    def query_for_object(self, query: GetQuery, entity_type: type[Any]) -> Any:
        information = EntityInformation(entity_type)
        source = self.documents.get(information.index_name, {}).get(query.id)
        if source is None:
            return None
        return information.from_source(source, document_id=query.id)

    def query_for_page(self, query: SearchQuery, entity_type: type[Any]) -> Page[Any]:
        information = EntityInformation(entity_type)
        matched = self._matching(information.index_name, query.query)
        return self._page(information, matched, query.pageable or DEFAULT_PAGE)

    def count(self, query: SearchQuery, entity_type: type[BaseModel]) -> int:
        return len(self._matching(EntityInformation(entity_type).index_name, query.query))

    def index(self, query: IndexQuery) -> str:
        information = EntityInformation(type(query.entity))
        index_name = query.index_name or information.index_name
        document_id = query.id or f"generated-{next(self._ids)}"
        self.documents.setdefault(index_name, {})[document_id] = information.to_source(query.entity)
        self.write_refreshes.append(query.refresh)
        return document_id

    def bulk_index(self, queries: Sequence[IndexQuery]) -> list[str]:
        return [self.index(query) for query in queries]

    def delete(
        self, index_name: str, type_name: str, id: str, *, refresh: str | None = None
    ) -> str:
        self.documents.get(index_name, {}).pop(id, None)
        self.write_refreshes.append(refresh)
        return id

    def delete_by_query(self, query: DeleteQuery, entity_type: type[BaseModel]) -> int:
        index_name = query.index_name or EntityInformation(entity_type).index_name
        matched = self._matching(index_name, query.query)
        for document_id, _ in matched:
            del self.documents[index_name][document_id]
        self.write_refreshes.append(query.refresh)
        return len(matched)

    def more_like_this(self, query: MoreLikeThisQuery, entity_type: type[Any]) -> Page[Any]:
        information = EntityInformation(entity_type)
        others = [
            (document_id, source)
            for document_id, source in self._matching(information.index_name, None)
            if document_id != query.id
        ]
        return self._page(information, others, query.pageable or DEFAULT_PAGE)

    def _matching(
        self, index_name: str, clause: dict[str, Any] | None
    ) -> list[tuple[str, dict[str, Any]]]:
        return [
            (document_id, source)
            for document_id, source in self.documents.get(index_name, {}).items()
            if self._matches(clause, document_id, source)
        ]

    @staticmethod
    def _matches(clause: dict[str, Any] | None, document_id: str, source: dict[str, Any]) -> bool:
        if not clause or "match_all" in clause:
            return True
        if "ids" in clause:
            return document_id in clause["ids"]["values"]
        if "match" in clause:
            ((field, value),) = clause["match"].items()
            return str(value).lower() in str(source.get(field, "")).lower()
        if "term" in clause:
            ((field, value),) = clause["term"].items()
            return source.get(field) == value
        raise ValueError(f"Unsupported clause {clause}")

    @staticmethod
    def _page(
        information: EntityInformation[Any],
        matched: list[tuple[str, dict[str, Any]]],
        pageable: PageRequest,
    ) -> Page[Any]:
        ordered = list(matched)
        for order in reversed(pageable.sort.orders):
            ordered.sort(
                key=lambda item, name=order.property_name: item[1].get(name),
                reverse=order.direction is Direction.DESC,
            )
        window = ordered[pageable.offset : pageable.offset + pageable.size]
        content = [
            information.from_source(source, document_id=document_id)
            for document_id, source in window
        ]
        return Page(content=content, total_elements=len(matched), pageable=pageable)


@pytest.fixture
def memory_operations() -> InMemoryOperations:
    """Create empty in-memory search operations."""
    return InMemoryOperations()


@pytest.fixture
def mock_credentials() -> Credentials:
    """Create mock AWS credentials."""
    return Credentials(
        access_key="test-access-key",
        secret_key="test-secret-key",
        token="test-token",
    )


@pytest.fixture
def mock_opensearch_client() -> Generator[MagicMock, None, None]:
    """Create a mock OpenSearch client."""
    with patch("search_repo.opensearch.client.OpenSearch") as mock_opensearch_class:
        mock_client_instance = MagicMock()
        mock_opensearch_class.return_value = mock_client_instance

        # Mock the info() call that happens during connection
        mock_client_instance.info.return_value = {"cluster_name": "test-cluster"}

        # Mock the indices attribute for index operations
        mock_client_instance.indices = MagicMock()

        yield mock_client_instance


@pytest.fixture
def opensearch_client(mock_opensearch_client: MagicMock) -> OpenSearchClient:
    """Create an OpenSearchClient instance backed by the mock client."""
    return OpenSearchClient(
        host="localhost",
        port=9200,
        reporter=NullReporter(),
    )
