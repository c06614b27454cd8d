"""
OpenSearch domain entities.

This module contains the index entity, the document base model with its
metadata, the paging primitives and the query objects exchanged between
repositories and the search operations.
"""

from search_repo.opensearch.entities.base_entity import BaseEntity
from search_repo.opensearch.entities.document import Document, EntityInformation
from search_repo.opensearch.entities.index import Index, IndexSettings, Mappings, Settings
from search_repo.opensearch.entities.page import (
    DEFAULT_PAGE,
    Direction,
    Order,
    Page,
    PageRequest,
    Sort,
)
from search_repo.opensearch.entities.query import (
    DeleteQuery,
    GetQuery,
    IndexQuery,
    MoreLikeThisQuery,
    RefreshPolicy,
    SearchQuery,
)

__all__ = [
    "DEFAULT_PAGE",
    "BaseEntity",
    "DeleteQuery",
    "Direction",
    "Document",
    "EntityInformation",
    "GetQuery",
    "Index",
    "IndexQuery",
    "IndexSettings",
    "Mappings",
    "MoreLikeThisQuery",
    "Order",
    "Page",
    "PageRequest",
    "RefreshPolicy",
    "SearchQuery",
    "Settings",
    "Sort",
]
