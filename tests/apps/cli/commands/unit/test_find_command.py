"""
Unit tests for find CLI command.
"""

from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from opensearchpy.exceptions import TransportError

from apps.cli.commands import find
from search_repo.opensearch.entities import (
    Direction,
    Document,
    Page,
    PageRequest,
    RefreshPolicy,
    Sort,
)


class Book(Document):
    id: str | None = None
    title: str


@pytest.mark.unit
class TestFindCommand:
    """Test find command functionality."""

    # ============================================================================
    # Fixtures
    # ============================================================================

    @pytest.fixture
    def mock_repository(self) -> MagicMock:
        repository = MagicMock()
        repository.count.return_value = 2
        return repository

    @pytest.fixture
    def mock_connect(self, mock_repository: MagicMock) -> Generator[MagicMock, None, None]:
        with (
            patch("apps.cli.commands.find.connect") as mock_connect,
            patch("apps.cli.commands.find.load_entity_type", return_value=Book),
        ):
            mock_connect.return_value.repository.return_value = mock_repository
            yield mock_connect

    @pytest.fixture
    def base_find_args(self) -> dict[str, Any]:
        """Base arguments for find.main() calls."""
        return {
            "assume_role": None,
            "entity": "books.models:Book",
            "opensearch_host": "localhost",
            "opensearch_port": 9200,
            "profile": None,
            "refresh_policy": "immediate",
            "region": "us-east-1",
        }

    # ============================================================================
    # Command Definition Tests
    # ============================================================================

    def test_command_definition(self) -> None:
        """Test that command definition is properly structured."""
        assert find.DEFINITION["name"] == "find"
        assert "description" in find.DEFINITION

        arg_names = [arg["name"] for arg in find.DEFINITION["arguments"]]
        for name in [
            "assume-role",
            "desc",
            "entity",
            "id",
            "match",
            "opensearch-host",
            "opensearch-port",
            "page",
            "profile",
            "refresh-policy",
            "region",
            "similar-to",
            "size",
            "sort",
        ]:
            assert name in arg_names

    # ============================================================================
    # Behavior Tests
    # ============================================================================

    def test_find_by_id(
        self,
        mock_connect: MagicMock,
        mock_repository: MagicMock,
        base_find_args: dict[str, Any],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        mock_repository.find_one.return_value = Book(id="1", title="Dune")

        find.main(**base_find_args, id="1")

        mock_connect.return_value.repository.assert_called_once_with(
            Book, refresh_policy=RefreshPolicy.IMMEDIATE
        )
        mock_repository.find_one.assert_called_once_with("1")
        assert '{"id":"1","title":"Dune"}' in capsys.readouterr().out

    def test_find_by_missing_id_exits(
        self,
        mock_connect: MagicMock,
        mock_repository: MagicMock,
        base_find_args: dict[str, Any],
    ) -> None:
        mock_repository.find_one.return_value = None

        with pytest.raises(SystemExit) as exc_info:
            find.main(**base_find_args, id="missing")

        assert exc_info.value.code == 1

    def test_lists_all_entities(
        self,
        mock_connect: MagicMock,
        mock_repository: MagicMock,
        base_find_args: dict[str, Any],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        mock_repository.find_all.return_value = Page(
            content=[Book(id="1", title="Dune"), Book(id="2", title="Emma")], total_elements=2
        )

        find.main(**base_find_args, sort=["title"], desc=True)

        mock_repository.find_all.assert_called_once_with(
            sort=Sort.by("title", direction=Direction.DESC), pageable=None
        )
        assert "2 of 2 results" in capsys.readouterr().out

    def test_lists_one_page(
        self,
        mock_connect: MagicMock,
        mock_repository: MagicMock,
        base_find_args: dict[str, Any],
    ) -> None:
        mock_repository.find_all.return_value = Page()

        find.main(**base_find_args, page=1, size=5)

        mock_repository.find_all.assert_called_once_with(
            sort=Sort(), pageable=PageRequest(page=1, size=5)
        )

    def test_match(
        self,
        mock_connect: MagicMock,
        mock_repository: MagicMock,
        base_find_args: dict[str, Any],
    ) -> None:
        mock_repository.search.return_value = Page()

        find.main(**base_find_args, match="title=dune messiah")

        mock_repository.search.assert_called_once_with(
            {"match": {"title": "dune messiah"}}, None
        )

    def test_invalid_match_exits_before_connecting(
        self,
        mock_connect: MagicMock,
        base_find_args: dict[str, Any],
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            find.main(**base_find_args, match="dune")

        assert exc_info.value.code == 1
        mock_connect.assert_not_called()

    def test_similar_to(
        self,
        mock_connect: MagicMock,
        mock_repository: MagicMock,
        base_find_args: dict[str, Any],
    ) -> None:
        source = Book(id="1", title="Dune")
        mock_repository.find_one.return_value = source
        mock_repository.search_similar.return_value = Page()

        find.main(**base_find_args, similar_to="1")

        mock_repository.search_similar.assert_called_once_with(source, None)

    def test_opensearch_error_exits(
        self,
        mock_connect: MagicMock,
        mock_repository: MagicMock,
        base_find_args: dict[str, Any],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        mock_repository.find_all.side_effect = TransportError(500, "boom", {})

        with pytest.raises(SystemExit) as exc_info:
            find.main(**base_find_args)

        assert exc_info.value.code == 1
        assert "OpenSearch error" in capsys.readouterr().out
