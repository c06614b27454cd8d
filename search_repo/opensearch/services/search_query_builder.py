"""Query builder for OpenSearch search requests."""

from typing import Any, Self

from search_repo.interfaces import SearchRequest
from search_repo.opensearch.entities import PageRequest, Sort
from search_repo.opensearch.entities.query import match_all


class SearchQueryBuilder:
    """Search request builder for OpenSearch."""

    def __init__(self, index: str) -> None:
        """Initialize SearchQueryBuilder with an index name."""
        self._exclude_fields: list[str] = []
        self._filters: list[dict[str, Any]] = []
        self._from: int | None = None
        self._index = index
        self._query: dict[str, Any] = match_all()
        self._size: int | None = None
        self._sort: list[dict[str, Any]] = []
        self._track_total_hits: bool | None = None

    def query(self, clause: dict[str, Any] | None) -> Self:
        """Set the query clause. None matches every document."""
        self._query = clause or match_all()
        return self

    def add_filters(self, values: list[dict[str, Any]]) -> Self:
        """Add multiple filters to the query."""
        self._filters.extend(values)
        return self

    def exclude_fields(self, fields: list[str]) -> Self:
        """Exclude fields from the returned sources."""
        self._exclude_fields.extend(fields)
        return self

    def sort(self, sort: Sort) -> Self:
        """Replace the sort orders."""
        self._sort = sort.to_clauses()
        return self

    def paginate(self, pageable: PageRequest) -> Self:
        """Request one page: offset, size and sort orders."""
        self._from = pageable.offset
        self._size = pageable.size
        return self.sort(pageable.sort)

    def track_total_hits(self, enabled: bool = True) -> Self:
        """Count every match instead of stopping at 10,000."""
        self._track_total_hits = enabled
        return self

    def _query_body(self) -> dict[str, Any]:
        if len(self._filters) > 0:
            return {
                "query": {
                    "bool": {
                        "must": [self._query],
                        "filter": self._filters,
                    }
                }
            }
        return {"query": self._query}

    def build(self) -> SearchRequest:
        """Build the search request."""
        body = self._query_body()

        if len(self._exclude_fields) > 0:
            body["_source"] = {"excludes": self._exclude_fields}

        if self._from is not None:
            body["from"] = self._from

        if self._size is not None:
            body["size"] = self._size

        if len(self._sort) > 0:
            body["sort"] = self._sort

        if self._track_total_hits is not None:
            body["track_total_hits"] = self._track_total_hits

        return SearchRequest(index=self._index, body=body, params={})

    def build_count(self) -> SearchRequest:
        """Build a count request: the query and filters only."""
        return SearchRequest(index=self._index, body=self._query_body(), params={})
