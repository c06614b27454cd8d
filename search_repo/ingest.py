"""Core ingestion functionality: validate rows into entities and store them in batches."""

import math
from collections.abc import Iterable, Iterator
from typing import Any, TypeVar

import pandas as pd
from pydantic import BaseModel, ValidationError

from search_repo.interfaces import IReporter
from search_repo.logging import get_logger
from search_repo.opensearch.repositories import DocumentRepository

T = TypeVar("T", bound=BaseModel)
E = TypeVar("E")

logger = get_logger(__name__)

BATCH_SIZE = 100


def _is_valid_value(value: Any) -> bool:
    """Check if value is valid (not None/NaN).

    Handles lists/arrays specially since pd.notna() on arrays returns
    an array, which causes "ambiguous truth value" errors.
    """
    if value is None:
        return False
    if isinstance(value, (list, tuple, dict)):
        return True
    return bool(pd.notna(value))


def _filter_nan_values(record: dict[str, Any]) -> dict[str, Any]:
    """Filter out NaN/None values from a record dict."""
    return {k: v for k, v in record.items() if _is_valid_value(v)}


def to_entities(
    *, entity_type: type[T], rows: Iterable[dict[str, Any]]
) -> list[T]:
    """Validate rows into entities.

    Raises:
        ValueError: If a row does not validate, naming its position
    """
    entities: list[T] = []
    for position, row in enumerate(rows):
        try:
            entities.append(entity_type.model_validate(_filter_nan_values(row)))
        except ValidationError as e:
            raise ValueError(f"Row {position} is not a valid {entity_type.__name__}: {e}") from e
    return entities


def _batches(entities: list[E], batch_size: int) -> Iterator[tuple[int, list[E]]]:
    """Yield (start position, entities) pairs of at most ``batch_size`` entities."""
    for start in range(0, len(entities), batch_size):
        yield start, entities[start : start + batch_size]


def ingest(
    *,
    batch_size: int = BATCH_SIZE,
    entity_type: type[T],
    reporter: IReporter,
    repository: DocumentRepository[T],
    rows: list[dict[str, Any]],
) -> int:
    """Store rows as entities, one bulk request per batch.

    Every row is validated before the first request is sent, so an invalid
    row leaves the index untouched. Progress is reported in documents.

    Args:
        batch_size: Number of entities per bulk request (default: 100)
        entity_type: Entity class the rows are validated into
        reporter: Reporter instance
        repository: Repository of the entity type
        rows: List of rows to ingest

    Returns:
        Number of stored entities
    """
    if batch_size < 1:
        raise ValueError("Batch size must be at least 1")

    if not len(rows):
        reporter.on_message("No rows to ingest")
        return 0

    entities = to_entities(entity_type=entity_type, rows=rows)
    batch_count = math.ceil(len(entities) / batch_size)
    reporter.on_message(
        f"Indexing {len(entities)} {entity_type.__name__} documents "
        f"in {batch_count} bulk request(s)\n"
    )

    try:
        reporter.start_progress(total=len(entities))
        for start, batch in _batches(entities, batch_size):
            logger.debug("Saving rows %d-%d", start, start + len(batch) - 1)
            repository.save_all(batch)
            reporter.on_progress(len(batch))
    finally:
        reporter.stop_progress()

    reporter.on_message(f"\nIndexed {len(entities)} documents.\n")
    return len(entities)
