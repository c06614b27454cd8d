"""Unit tests for IndexRepository."""

from typing import Any
from unittest.mock import MagicMock

import pytest

from search_repo.opensearch.entities.index import Index, IndexSettings, Mappings, Settings
from search_repo.opensearch.repositories.index import IndexRepository


@pytest.mark.unit
class TestIndexRepository:
    """Tests for IndexRepository."""

    @pytest.fixture
    def mock_client(self) -> MagicMock:
        """Create a mock OpenSearch client."""
        mock = MagicMock()
        mock.indices = MagicMock()
        return mock

    @pytest.fixture
    def index_repo(self, mock_client: MagicMock) -> IndexRepository:
        """Create an IndexRepository instance with mock client."""
        return IndexRepository(client=mock_client)

    def test_create_index(self, index_repo: IndexRepository, mock_client: Any) -> None:
        """Test creating an index with settings and mappings."""
        mock_client.indices.create.return_value = {"acknowledged": True}

        index = index_repo.create(
            index="books",
            settings=IndexSettings(number_of_shards=2, number_of_replicas=0, refresh_interval="1s"),
            mappings=Mappings(properties={"title": {"type": "text"}}),
        )

        assert isinstance(index, Index)
        assert index.name == "books"
        assert index.settings.index.number_of_shards == 2
        assert index._repository == index_repo

        mock_client.indices.create.assert_called_once_with(
            index="books",
            body={
                "settings": {
                    "index": {
                        "number_of_shards": 2,
                        "number_of_replicas": 0,
                        "refresh_interval": "1s",
                    }
                },
                "mappings": {"properties": {"title": {"type": "text"}}},
            },
        )

    def test_create_index_without_mappings(
        self, index_repo: IndexRepository, mock_client: Any
    ) -> None:
        """Test that empty mappings and unset settings are left out of the request."""
        index_repo.create(index="notes")

        body = mock_client.indices.create.call_args[1]["body"]
        assert body == {"settings": {"index": {"number_of_shards": 1, "number_of_replicas": 1}}}

    def test_get_index(self, index_repo: IndexRepository, mock_client: Any) -> None:
        """Test reading an index back from OpenSearch."""
        mock_client.indices.get.return_value = {
            "books": {
                "settings": {
                    "index": {
                        "number_of_shards": "1",
                        "number_of_replicas": "1",
                        "uuid": "abc",
                        "provided_name": "books",
                    }
                },
                "mappings": {"properties": {"title": {"type": "text"}}},
            }
        }

        index = index_repo.get(index="books")

        assert index.name == "books"
        assert index.settings == Settings(index=IndexSettings())
        assert index.mappings.properties == {"title": {"type": "text"}}
        mock_client.indices.get.assert_called_once_with(index="books")

    def test_delete_index_ignores_missing(self, index_repo: IndexRepository, mock_client: Any) -> None:
        """Test that deleting an index tolerates a missing index."""
        index = Index(name="books", settings=Settings(), mappings=Mappings())

        index_repo.delete(index=index)

        mock_client.indices.delete.assert_called_once_with(index="books", ignore=[400, 404])

    def test_exists(self, index_repo: IndexRepository, mock_client: Any) -> None:
        mock_client.indices.exists.return_value = False

        assert index_repo.exists("books") is False
        mock_client.indices.exists.assert_called_once_with(index="books")

    def test_put_mapping(self, index_repo: IndexRepository, mock_client: Any) -> None:
        index_repo.put_mapping(
            index="books", mappings=Mappings(properties={"year": {"type": "integer"}})
        )

        mock_client.indices.put_mapping.assert_called_once_with(
            index="books", body={"properties": {"year": {"type": "integer"}}}
        )

    def test_refresh(self, index_repo: IndexRepository, mock_client: Any) -> None:
        index_repo.refresh(index_name="books")

        mock_client.indices.refresh.assert_called_once_with(index="books")
