"""OpenSearch service classes for high-level operations."""

from search_repo.opensearch.services.operations import OpenSearchOperations
from search_repo.opensearch.services.search_query_builder import SearchQueryBuilder

__all__ = [
    "OpenSearchOperations",
    "SearchQueryBuilder",
]
