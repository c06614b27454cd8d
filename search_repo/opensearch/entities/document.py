"""Document base model and the metadata derived from it."""

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from search_repo.opensearch.entities.index import IndexSettings, Mappings

T = TypeVar("T", bound=BaseModel)


class Document(BaseModel):
    """Base class for entities stored in an OpenSearch index.

    Storage details are declared as class variables on the subclass::

        class Book(Document):
            index_name = "books"
            mapping = {"title": {"type": "text"}}

            id: str | None = None
            title: str

    Any pydantic model can be stored; models that do not derive from this
    class fall back to the defaults below.
    """

    index_name: ClassVar[str | None] = None
    type_name: ClassVar[str | None] = None
    id_field: ClassVar[str] = "id"
    version_field: ClassVar[str | None] = None
    shards: ClassVar[int] = 1
    replicas: ClassVar[int] = 1
    refresh_interval: ClassVar[str | None] = None
    mapping: ClassVar[dict[str, Any]] = {}


class EntityInformation(Generic[T]):
    """Storage metadata for one entity type.

    Resolves the index name, type name and id/version attributes of the type,
    and extracts ids and versions from its instances.
    """

    def __init__(self, entity_type: type[T]) -> None:
        if entity_type is None:
            raise ValueError("Entity type must not be None.")
        if not (isinstance(entity_type, type) and issubclass(entity_type, BaseModel)):
            raise ValueError(f"{entity_type!r} is not a pydantic model.")

        default_name = entity_type.__name__.lower()
        self._entity_type = entity_type
        self._index_name: str = getattr(entity_type, "index_name", None) or default_name
        self._type_name: str = getattr(entity_type, "type_name", None) or default_name
        self._id_attribute: str = getattr(entity_type, "id_field", "id")
        self._version_attribute: str | None = getattr(entity_type, "version_field", None)

        if self._id_attribute not in entity_type.model_fields:
            raise ValueError(
                f"{entity_type.__name__} has no id field '{self._id_attribute}'. "
                "Declare the field or set 'id_field' on the class."
            )
        if self._version_attribute and self._version_attribute not in entity_type.model_fields:
            raise ValueError(
                f"{entity_type.__name__} has no version field '{self._version_attribute}'."
            )

    @property
    def entity_type(self) -> type[T]:
        return self._entity_type

    @property
    def index_name(self) -> str:
        return self._index_name

    @property
    def type_name(self) -> str:
        return self._type_name

    @property
    def id_attribute(self) -> str:
        return self._id_attribute

    @property
    def version_attribute(self) -> str | None:
        return self._version_attribute

    @property
    def settings(self) -> IndexSettings:
        return IndexSettings(
            number_of_shards=getattr(self._entity_type, "shards", 1),
            number_of_replicas=getattr(self._entity_type, "replicas", 1),
            refresh_interval=getattr(self._entity_type, "refresh_interval", None),
        )

    @property
    def mapping(self) -> Mappings:
        return Mappings(properties=dict(getattr(self._entity_type, "mapping", {}) or {}))

    def get_id(self, entity: T) -> str | None:
        value = getattr(entity, self._id_attribute, None)
        return None if value is None else str(value)

    def get_version(self, entity: T) -> int | None:
        if self._version_attribute is None:
            return None
        value = getattr(entity, self._version_attribute, None)
        return None if value is None else int(value)

    def to_source(self, entity: T) -> dict[str, Any]:
        """Serialize an entity into the ``_source`` of its document."""
        return entity.model_dump(mode="json")

    def from_source(
        self,
        source: dict[str, Any],
        *,
        document_id: str | None = None,
        version: int | None = None,
    ) -> T:
        """Build an entity from a stored ``_source``.

        The document id and version fill the id and version fields when the
        source does not carry them.
        """
        data = dict(source)
        if data.get(self._id_attribute) is None and document_id is not None:
            data[self._id_attribute] = document_id
        if self._version_attribute and data.get(self._version_attribute) is None and version is not None:
            data[self._version_attribute] = version
        return self._entity_type.model_validate(data)
