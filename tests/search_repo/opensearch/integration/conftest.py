"""Pytest fixtures for OpenSearchClient integration tests."""

import os
import uuid
from collections.abc import Generator
from typing import Any

import pytest

from search_repo.config import OpenSearchSettings
from search_repo.null_reporter import NullReporter
from search_repo.opensearch.client import OpenSearchClient
from search_repo.opensearch.entities import Document
from search_repo.utils import get_opensearch_client


@pytest.fixture(scope="session")
def opensearch_settings() -> OpenSearchSettings:
    """Read connection settings from the OPENSEARCH_* environment variables."""
    if not os.getenv("OPENSEARCH_HOST"):
        pytest.skip("OPENSEARCH_HOST environment variable is not set")
    return OpenSearchSettings()


@pytest.fixture(scope="module")
def opensearch(opensearch_settings: OpenSearchSettings) -> OpenSearchClient:
    """
    Create a real OpenSearchClient instance for integration tests.

    The client connects during initialization and raises if the cluster
    cannot be reached.
    """
    client = get_opensearch_client(opensearch_settings, reporter=NullReporter())

    cluster_info = client._client.info()
    print(
        f"\n[Integration Test] Connected to OpenSearch instance at "
        f"{opensearch_settings.host}:{opensearch_settings.port}"
    )
    print(f"[Integration Test] Cluster: {cluster_info.get('cluster_name', 'unknown')}")

    return client


@pytest.fixture(scope="function")
def index_name(opensearch: OpenSearchClient) -> Generator[str, None, None]:
    """Return a unique index name and delete the index after the test."""
    name = f"test-index-{uuid.uuid4().hex[:8]}"

    yield name

    if opensearch.indexes.exists(name):
        opensearch.indexes.delete(index=opensearch.indexes.get(index=name))


@pytest.fixture(scope="function")
def index_entity(index_name: str) -> Any:
    """Build a fresh entity class stored in the test index."""
    name = index_name

    class Book(Document):
        index_name = name
        mapping = {
            "title": {"type": "text"},
            "year": {"type": "integer"},
        }

        id: str | None = None
        title: str
        year: int = 0

    return Book
