"""Index domain entity."""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from search_repo.opensearch.entities.base_entity import BaseEntity

if TYPE_CHECKING:
    from search_repo.opensearch.repositories.index import IndexRepository


class IndexSettings(BaseModel):
    """Index-level settings.

    OpenSearch returns every setting as a string and adds read-only keys
    (uuid, creation_date, ...), which are ignored here.
    """

    model_config = ConfigDict(extra="ignore")

    number_of_shards: int = Field(default=1, gt=0)
    number_of_replicas: int = Field(default=1, ge=0)
    refresh_interval: str | None = None


class Settings(BaseModel):
    """Index settings container."""

    index: IndexSettings = Field(default_factory=IndexSettings)


class Mappings(BaseModel):
    """Index mappings container."""

    model_config = ConfigDict(extra="ignore")

    properties: dict[str, dict[str, Any]] = Field(default_factory=dict)


class Index(BaseModel, BaseEntity["Index"]):
    """Domain model representing an OpenSearch index."""

    name: str
    settings: Settings
    mappings: Mappings
    _repository: "IndexRepository" = PrivateAttr()  # type: ignore[assignment]

    def __init__(self, **data: Any) -> None:
        """Initialize Index with repository support."""
        repository = data.pop("_repository", None)
        super().__init__(**data)
        if repository is not None:
            self._repository = repository

    def delete(self) -> Any:  # type: ignore[override]
        """Delete this index.

        Returns:
            Deletion response from OpenSearch
        """
        return self._repository.delete(index=self)

    def exists(self) -> bool:
        """Check if this index exists."""
        return self._repository.exists(self.name)

    def refresh(self) -> Any:
        """Make every write acknowledged so far visible to searches."""
        return self._repository.refresh(index_name=self.name)

    def put_mapping(self, properties: dict[str, dict[str, Any]]) -> Any:
        """Add field mappings to this index and to its local mapping.

        Existing fields cannot change type; OpenSearch rejects such requests.
        """
        mappings = Mappings(properties=properties)
        response = self._repository.put_mapping(index=self.name, mappings=mappings)
        self.mappings.properties.update(properties)
        return response
