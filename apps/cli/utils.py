"""
Utility functions for the search repository CLI tool.
"""

import json
import sys
import traceback
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from opensearchpy.exceptions import TransportError
from pydantic import BaseModel

from search_repo.exceptions import RepositoryError
from search_repo.interfaces import IReporter
from search_repo.opensearch.entities import Page


def parse_assignment(value: str) -> tuple[str, str]:
    """
    Split a ``FIELD=VALUE`` argument.

    Args:
        value: Argument as given on the command line

    Returns:
        The field name and the value

    Raises:
        ValueError: If the argument has no '=' or an empty field name
    """
    field, separator, field_value = value.partition("=")
    if not separator or not field.strip():
        raise ValueError(f"Expected FIELD=VALUE, got '{value}'")
    return field.strip(), field_value


def format_entity(entity: BaseModel) -> str:
    """Render an entity as a single JSON line."""
    return entity.model_dump_json()


def report_page(page: Page[Any], *, reporter: IReporter) -> None:
    """Print every entity of a page followed by a summary line."""
    for entity in page:
        reporter.on_message(format_entity(entity))
    reporter.on_message(f"\n{len(page)} of {page.total_elements} results")


def parse_json_column(value: str) -> Any:
    """Parse a JSON encoded cell, keeping the raw string when it is not JSON."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


@contextmanager
def exit_on_error(reporter: IReporter) -> Iterator[None]:
    """Report any error raised in the block and exit with status 1."""
    try:
        yield
    except (RepositoryError, ValueError) as e:
        reporter.on_message(f"Error: {e}")
        sys.exit(1)
    except TransportError as e:
        reporter.on_message(f"OpenSearch error: {e}")
        sys.exit(1)
    except Exception as e:
        reporter.on_message(f"Unexpected error: {e}")
        reporter.on_message(traceback.format_exc())
        sys.exit(1)
