"""Search operations implemented on the opensearch-py client."""

import json
from collections.abc import Sequence
from typing import Any, TypeVar

from opensearchpy import OpenSearch
from opensearchpy.exceptions import NotFoundError
from pydantic import BaseModel

from search_repo.exceptions import BulkIndexError
from search_repo.interfaces import ISearchOperations
from search_repo.logging import get_logger
from search_repo.opensearch.entities import (
    DEFAULT_PAGE,
    DeleteQuery,
    EntityInformation,
    GetQuery,
    IndexQuery,
    MoreLikeThisQuery,
    Page,
    PageRequest,
    SearchQuery,
)
from search_repo.opensearch.repositories.index import IndexRepository
from search_repo.opensearch.services.search_query_builder import SearchQueryBuilder

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)

INDEX_NOT_FOUND = "index_not_found_exception"


class OpenSearchOperations(ISearchOperations):
    """Search operations for OpenSearch.

    A 404 for a missing document is reported as ``None`` (or ignored on delete);
    a 404 for a missing index, and every other client error, is raised as is.
    """

    _client: OpenSearch

    def __init__(self, *, client: OpenSearch, indexes: IndexRepository | None = None) -> None:
        self._client = client
        self._indexes = indexes or IndexRepository(client=client)

    # Indexes

    def create_index(self, entity_type: type[BaseModel]) -> bool:
        information = EntityInformation(entity_type)
        if self._indexes.exists(information.index_name):
            logger.debug("Index '%s' already exists", information.index_name)
            return False
        self._indexes.create(index=information.index_name, settings=information.settings)
        return True

    def put_mapping(self, entity_type: type[BaseModel]) -> bool:
        information = EntityInformation(entity_type)
        mappings = information.mapping
        if not mappings.properties:
            logger.debug(
                "%s declares no mapping, index '%s' uses dynamic mapping",
                entity_type.__name__,
                information.index_name,
            )
            return False
        self._indexes.put_mapping(index=information.index_name, mappings=mappings)
        return True

    def index_exists(self, entity_type: type[BaseModel]) -> bool:
        return self._indexes.exists(EntityInformation(entity_type).index_name)

    def delete_index(self, entity_type: type[BaseModel]) -> bool:
        index_name = EntityInformation(entity_type).index_name
        if not self._indexes.exists(index_name):
            return False
        self._indexes.delete(index=self._indexes.get(index=index_name))
        return True

    def refresh(self, index_name: str) -> None:
        self._indexes.refresh(index_name=index_name)

    # Reads

    def query_for_object(self, query: GetQuery, entity_type: type[T]) -> T | None:
        information = EntityInformation(entity_type)
        try:
            response = self._client.get(index=information.index_name, id=query.id)
        except NotFoundError as e:
            if e.error == INDEX_NOT_FOUND:
                raise
            return None

        if not response.get("found", True):
            return None
        return information.from_source(
            response["_source"],
            document_id=response["_id"],
            version=response.get("_version"),
        )

    def query_for_page(self, query: SearchQuery, entity_type: type[T]) -> Page[T]:
        information = EntityInformation(entity_type)
        pageable = query.pageable or DEFAULT_PAGE
        request = (
            SearchQueryBuilder(information.index_name)
            .query(query.query)
            .add_filters(query.filters)
            .exclude_fields(query.exclude_fields)
            .paginate(pageable)
            .track_total_hits()
            .build()
        )
        return self._search_for_page(request.index, request.body, information, pageable)

    def count(self, query: SearchQuery, entity_type: type[BaseModel]) -> int:
        information = EntityInformation(entity_type)
        request = (
            SearchQueryBuilder(information.index_name)
            .query(query.query)
            .add_filters(query.filters)
            .build_count()
        )
        logger.debug("Counting documents in '%s': %s", request.index, request.body)
        return self._client.count(index=request.index, body=request.body)["count"]

    def more_like_this(
        self, query: MoreLikeThisQuery, entity_type: type[T]
    ) -> Page[T]:
        information = EntityInformation(entity_type)
        pageable = query.pageable or DEFAULT_PAGE
        request = (
            SearchQueryBuilder(information.index_name)
            .query(query.to_clause(information.index_name))
            .paginate(pageable)
            .track_total_hits()
            .build()
        )
        return self._search_for_page(request.index, request.body, information, pageable)

    # Writes

    def index(self, query: IndexQuery) -> str:
        information = EntityInformation(type(query.entity))
        index_name = query.index_name or information.index_name

        params: dict[str, Any] = {}
        if query.id is not None:
            params["id"] = query.id
        if query.version is not None:
            params["version"] = query.version
            params["version_type"] = "external"
        if query.refresh is not None:
            params["refresh"] = query.refresh

        logger.debug("Indexing document %s into '%s'", query.id or "<generated>", index_name)
        response = self._client.index(
            index=index_name,
            body=information.to_source(query.entity),
            **params,
        )
        return response["_id"]

    def bulk_index(self, queries: Sequence[IndexQuery]) -> list[str]:
        """Write every query in one bulk request.

        Raises:
            BulkIndexError: If any item was rejected. The other items stay written.
        """
        lines: list[str] = []
        for query in queries:
            information = EntityInformation(type(query.entity))
            action: dict[str, Any] = {"_index": query.index_name or information.index_name}
            if query.id is not None:
                action["_id"] = query.id
            if query.version is not None:
                action["version"] = query.version
                action["version_type"] = "external"
            lines.append(json.dumps({"index": action}))
            lines.append(json.dumps(information.to_source(query.entity)))
        body = "\n".join(lines) + "\n"

        params: dict[str, Any] = {}
        refresh = next((query.refresh for query in queries if query.refresh), None)
        if refresh is not None:
            params["refresh"] = refresh

        response = self._client.bulk(body=body, params=params)
        logger.debug(response)
        self._raise_bulk_errors(response)
        return [item["index"]["_id"] for item in response["items"]]

    def delete(
        self, index_name: str, type_name: str, id: str, *, refresh: str | None = None
    ) -> str:
        params: dict[str, Any] = {"refresh": refresh} if refresh is not None else {}
        logger.debug("Deleting %s document %s from '%s'", type_name, id, index_name)
        try:
            self._client.delete(index=index_name, id=id, **params)
        except NotFoundError as e:
            if e.error == INDEX_NOT_FOUND:
                raise
            logger.debug("Document %s not found in '%s', nothing to delete", id, index_name)
        return id

    def delete_by_query(self, query: DeleteQuery, entity_type: type[BaseModel]) -> int:
        index_name = query.index_name or EntityInformation(entity_type).index_name
        params: dict[str, Any] = {"refresh": True} if query.refresh else {}
        logger.debug("Deleting documents from '%s' matching %s", index_name, query.query)
        response = self._client.delete_by_query(
            index=index_name, body={"query": query.query}, **params
        )
        return response.get("deleted", 0)

    # Helpers

    def _search_for_page(
        self,
        index: str,
        body: dict[str, Any],
        information: EntityInformation[T],
        pageable: PageRequest,
    ) -> Page[T]:
        logger.debug("Searching '%s': %s", index, body)
        response = self._client.search(index=index, body=body)

        hits = response["hits"]
        total = hits["total"]
        total_elements = total["value"] if isinstance(total, dict) else int(total)

        content = [
            information.from_source(hit["_source"], document_id=hit["_id"])
            for hit in hits["hits"]
        ]
        return Page(content=content, total_elements=total_elements, pageable=pageable)

    def _raise_bulk_errors(self, response: dict[str, Any]) -> None:
        if not response.get("errors"):
            return

        failures: dict[str, Any] = {}
        for item in response["items"]:
            result = item.get("index", {})
            if "error" in result:
                failures[str(result.get("_id"))] = result["error"]

        if failures:
            error_types = sorted({failure.get("type", "unknown") for failure in failures.values()})
            message = f"Bulk indexing has {len(failures)} failure(s) ({error_types})"
            logger.warning("%s: %s", message, failures)
            raise BulkIndexError(message, failures)
