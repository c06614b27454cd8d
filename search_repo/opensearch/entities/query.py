"""Query objects passed from repositories to the search operations.

Every object here is built fresh for a single call and never reused.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel

from search_repo.opensearch.entities.page import PageRequest


class RefreshPolicy(Enum):
    """When writes become visible to searches.

    IMMEDIATE: refresh the index after every write and wait for it.
    DEFERRED: let the write request wait for the next scheduled refresh.
    NONE: return as soon as the write is acknowledged.
    """

    IMMEDIATE = "immediate"
    DEFERRED = "deferred"
    NONE = "none"


def match_all() -> dict[str, Any]:
    return {"match_all": {}}


def ids_in(ids: Iterable[str]) -> dict[str, Any]:
    """Match documents whose ``_id`` is one of ``ids``."""
    return {"ids": {"values": [str(value) for value in ids]}}


def match(*, field: str, value: Any) -> dict[str, Any]:
    return {"match": {field: value}}


def term(*, field: str, value: Any) -> dict[str, Any]:
    return {"term": {field: value}}


@dataclass
class GetQuery:
    """Fetch a single document by id."""

    id: str


@dataclass
class SearchQuery:
    """Search with an optional query clause, filters and page request.

    A query without a clause matches every document.
    """

    query: dict[str, Any] | None = None
    filters: list[dict[str, Any]] = field(default_factory=list)
    pageable: PageRequest | None = None
    exclude_fields: list[str] = field(default_factory=list)


@dataclass
class IndexQuery:
    """Write one entity, optionally under an explicit id and external version."""

    entity: BaseModel
    id: str | None = None
    version: int | None = None
    index_name: str | None = None
    refresh: str | None = None


@dataclass
class DeleteQuery:
    """Delete every document matching ``query``."""

    query: dict[str, Any] = field(default_factory=match_all)
    index_name: str | None = None
    refresh: bool = False


@dataclass
class MoreLikeThisQuery:
    """Find documents similar to the document stored under ``id``."""

    id: str
    fields: list[str] = field(default_factory=list)
    pageable: PageRequest | None = None
    min_term_freq: int | None = None
    max_query_terms: int | None = None
    min_doc_freq: int | None = None
    max_doc_freq: int | None = None
    min_word_length: int | None = None
    max_word_length: int | None = None
    boost_terms: float | None = None
    stop_words: list[str] = field(default_factory=list)
    minimum_should_match: str | None = None

    def to_clause(self, index_name: str) -> dict[str, Any]:
        options: dict[str, Any] = {
            "like": [{"_index": index_name, "_id": self.id}],
        }
        if self.fields:
            options["fields"] = self.fields
        if self.stop_words:
            options["stop_words"] = self.stop_words
        for name in (
            "min_term_freq",
            "max_query_terms",
            "min_doc_freq",
            "max_doc_freq",
            "min_word_length",
            "max_word_length",
            "boost_terms",
            "minimum_should_match",
        ):
            value = getattr(self, name)
            if value is not None:
                options[name] = value
        return {"more_like_this": options}
