"""Index setup for an entity type."""

from pydantic import BaseModel

from search_repo.interfaces import IReporter
from search_repo.opensearch.client import OpenSearchClient


def setup_index(
    *,
    delete: bool = False,
    entity_type: type[BaseModel],
    opensearch: OpenSearchClient,
    reporter: IReporter,
) -> bool:
    """Create the index of an entity type and put its mapping.

    Args:
        delete: If True, delete an existing index before recreating it
        entity_type: Entity class whose index is set up
        opensearch: OpenSearchClient instance
        reporter: Reporter instance

    Returns:
        True if the index was created, False if it already existed
    """
    operations = opensearch.operations

    if operations.index_exists(entity_type):
        if not delete:
            return False
        operations.delete_index(entity_type)
        reporter.on_message(f"Deleted existing index for {entity_type.__name__}")

    operations.create_index(entity_type)
    if operations.put_mapping(entity_type):
        reporter.on_message(f"Applied mapping declared by {entity_type.__name__}")
    return True
