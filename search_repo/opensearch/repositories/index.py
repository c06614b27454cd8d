"""Index repository."""

from __future__ import annotations

from typing import Any

from search_repo.logging import get_logger
from search_repo.opensearch.entities.index import Index, IndexSettings, Mappings, Settings
from search_repo.opensearch.repositories.base_repository import BaseRepository

logger = get_logger(__name__)


class IndexRepository(BaseRepository[Index]):
    """Repository for managing Index entities."""

    def create(
        self,
        *,
        index: str,
        settings: IndexSettings | None = None,
        mappings: Mappings | None = None,
        **_: Any,
    ) -> Index:
        """Create a new index and return an Index instance.

        Args:
            index: Name of the index
            settings: Shard, replica and refresh settings (default: IndexSettings())
            mappings: Field mappings; omitted from the request when empty

        Returns:
            An Index domain model instance
        """
        settings = settings or IndexSettings()
        mappings = mappings or Mappings()

        body: dict[str, Any] = {
            "settings": {"index": settings.model_dump(mode="json", exclude_none=True)},
        }
        if mappings.properties:
            body["mappings"] = mappings.model_dump(mode="json")

        logger.info("Creating index '%s'", index)
        self._client.indices.create(index=index, body=body)

        return Index(
            name=index,
            settings=Settings(index=settings),
            mappings=mappings,
            _repository=self,
        )

    def get(self, *, index: str, **_: Any) -> Index:
        """Get index information and return an Index instance.

        Args:
            index: Name of the index

        Returns:
            An Index domain model instance
        """
        data = self._client.indices.get(index=index)

        return Index(
            name=index,
            settings=Settings.model_validate(data[index]["settings"]),
            mappings=Mappings.model_validate(data[index]["mappings"]),
            _repository=self,
        )

    def delete(self, *, index: Index, **_: Any) -> Any:
        """Delete an index, ignoring indexes that do not exist.

        Args:
            index: The Index entity to delete

        Returns:
            Deletion response
        """
        logger.info("Deleting index '%s'", index.name)
        return self._client.indices.delete(index=index.name, ignore=[400, 404])  # type: ignore

    def exists(self, index_name: str) -> bool:
        """Check if an index exists."""
        return self._client.indices.exists(index=index_name)

    def put_mapping(self, *, index: str, mappings: Mappings) -> Any:
        """Add field mappings to an existing index."""
        logger.info("Putting mapping for %d field(s) on index '%s'", len(mappings.properties), index)
        return self._client.indices.put_mapping(index=index, body=mappings.model_dump(mode="json"))

    def refresh(self, *, index_name: str) -> Any:
        """Refresh an index so that recent writes become searchable."""
        logger.debug("Refreshing index '%s'", index_name)
        return self._client.indices.refresh(index=index_name)
