"""
OpenSearch repositories.

This module contains the index repository, which manages OpenSearch indexes,
and the document repositories, which store and search the entities of one
type. Repositories handle persistence operations and return domain model
instances.
"""

from search_repo.opensearch.repositories.base_repository import BaseRepository
from search_repo.opensearch.repositories.document_repository import DocumentRepository
from search_repo.opensearch.repositories.index import IndexRepository
from search_repo.opensearch.repositories.simple_document import SimpleDocumentRepository

__all__ = [
    "BaseRepository",
    "DocumentRepository",
    "IndexRepository",
    "SimpleDocumentRepository",
]
