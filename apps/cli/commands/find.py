import sys
from typing import TypeVar

from apps.cli.utils import exit_on_error, format_entity, parse_assignment, report_page
from search_repo.console_reporter import ConsoleReporter
from search_repo.interfaces import IReporter
from search_repo.opensearch.entities import Direction, PageRequest, RefreshPolicy, Sort
from search_repo.opensearch.entities import query as queries
from search_repo.opensearch.repositories import DocumentRepository
from search_repo.utils import load_entity_type

from .connection import CONNECTION_ARGUMENTS, DEFAULTS, connect

T = TypeVar("T")

DEFINITION = {
    "name": "find",
    "description": "Find entities by id, by field value, by similarity or list them all",
    "arguments": [
        *CONNECTION_ARGUMENTS,
        {
            "name": "desc",
            "action": "store_true",
            "required": False,
            "help": "Sort in descending order",
        },
        {
            "name": "id",
            "type": str,
            "required": False,
            "help": "Id of the entity to fetch",
        },
        {
            "name": "match",
            "type": str,
            "required": False,
            "help": "Full-text match as FIELD=VALUE",
        },
        {
            "name": "page",
            "type": int,
            "required": False,
            "help": "Page number to fetch, starting at 0 (default: all results)",
        },
        {
            "name": "similar-to",
            "type": str,
            "required": False,
            "help": "Id of an entity to find similar entities for",
        },
        {
            "name": "size",
            "type": int,
            "required": False,
            "default": 10,
            "help": "Page size when --page is set (default: 10)",
        },
        {
            "name": "sort",
            "type": str,
            "nargs": "+",
            "required": False,
            "default": [],
            "help": "Fields to sort by when listing all entities",
        },
    ],
}


def main(
    *,
    assume_role: str | None = None,
    desc: bool = False,
    entity: str,
    id: str | None = None,
    match: str | None = None,
    opensearch_host: str = DEFAULTS.host,
    opensearch_port: int = DEFAULTS.port,
    page: int | None = None,
    profile: str | None = None,
    refresh_policy: str = DEFAULTS.refresh_policy.value,
    region: str = DEFAULTS.region,
    similar_to: str | None = None,
    size: int = 10,
    sort: list[str] | None = None,
) -> None:
    """
    Main entry point for the find command.

    Args:
        assume_role: AWS role to assume for OpenSearch operations
        desc: Sort in descending order
        entity: Entity class as 'package.module:ClassName'
        id: Id of the entity to fetch
        match: Full-text match as FIELD=VALUE
        opensearch_host: OpenSearch host
        opensearch_port: OpenSearch port
        page: Page number to fetch
        profile: AWS profile to use
        refresh_policy: When writes become visible to searches
        region: AWS region
        similar_to: Id of an entity to find similar entities for
        size: Page size when page is set
        sort: Fields to sort by when listing all entities
    """
    reporter = ConsoleReporter()
    direction = Direction.DESC if desc else Direction.ASC
    order = Sort.by(*(sort or []), direction=direction)

    with exit_on_error(reporter):
        entity_type = load_entity_type(entity)
        clause = None
        if match:
            field, value = parse_assignment(match)
            clause = queries.match(field=field, value=value)
        pageable = PageRequest(page=page, size=size, sort=order) if page is not None else None

        opensearch = connect(
            assume_role=assume_role,
            opensearch_host=opensearch_host,
            opensearch_port=opensearch_port,
            profile=profile,
            region=region,
            reporter=reporter,
        )
        repository = opensearch.repository(
            entity_type, refresh_policy=RefreshPolicy(refresh_policy)
        )

        reporter.on_message("=" * 80)
        reporter.on_message(f"{repository.count()} {entity_type.__name__} entities in index\n")

        if id is not None:
            reporter.on_message(format_entity(_require(repository, id, reporter=reporter)))
        elif similar_to is not None:
            source = _require(repository, similar_to, reporter=reporter)
            report_page(repository.search_similar(source, pageable), reporter=reporter)
        elif clause is not None:
            report_page(repository.search(clause, pageable), reporter=reporter)
        else:
            report_page(repository.find_all(sort=order, pageable=pageable), reporter=reporter)


def _require(repository: DocumentRepository[T], id: str, *, reporter: IReporter) -> T:
    """Return the entity stored under ``id``, or exit with status 1."""
    found = repository.find_one(id)
    if found is None:
        reporter.on_message(f"No entity with id '{id}'")
        sys.exit(1)
    return found
