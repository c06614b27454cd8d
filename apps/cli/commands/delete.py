import sys

from apps.cli.utils import exit_on_error
from search_repo.console_reporter import ConsoleReporter
from search_repo.opensearch.entities import RefreshPolicy
from search_repo.utils import load_entity_type

from .connection import CONNECTION_ARGUMENTS, DEFAULTS, confirm, connect

DEFINITION = {
    "name": "delete",
    "description": "Delete entities by id, or every entity of a type",
    "arguments": [
        *CONNECTION_ARGUMENTS,
        {
            "name": "all",
            "action": "store_true",
            "required": False,
            "help": "Delete every entity of the type",
        },
        {
            "name": "id",
            "type": str,
            "nargs": "+",
            "required": False,
            "default": [],
            "help": "Ids of the entities to delete",
        },
        {
            "name": "no-confirm",
            "action": "store_true",
            "required": False,
            "help": "Skip confirmation prompts",
        },
    ],
}


def main(
    *,
    all: bool = False,
    assume_role: str | None = None,
    entity: str,
    id: list[str] | None = None,
    no_confirm: bool = False,
    opensearch_host: str = DEFAULTS.host,
    opensearch_port: int = DEFAULTS.port,
    profile: str | None = None,
    refresh_policy: str = DEFAULTS.refresh_policy.value,
    region: str = DEFAULTS.region,
) -> None:
    """
    Main entry point for the delete command.

    Args:
        all: Delete every entity of the type
        assume_role: AWS role to assume for OpenSearch operations
        entity: Entity class as 'package.module:ClassName'
        id: Ids of the entities to delete
        no_confirm: Skip confirmation prompts
        opensearch_host: OpenSearch host
        opensearch_port: OpenSearch port
        profile: AWS profile to use
        refresh_policy: When writes become visible to searches
        region: AWS region
    """
    reporter = ConsoleReporter()
    ids = id or []

    if all == bool(ids):
        reporter.on_message("Error: Pass either --id or --all")
        sys.exit(1)

    with exit_on_error(reporter):
        entity_type = load_entity_type(entity)
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

        if not all:
            for entity_id in ids:
                repository.delete(entity_id)
            reporter.on_message(f"Deleted {len(ids)} {entity_type.__name__} entities")
            return

        if not no_confirm:
            confirm(
                f"\nAre you sure you want to permanently delete all "
                f"{repository.count()} {entity_type.__name__} entities?",
                reporter=reporter,
            )
        repository.delete_all()
        reporter.on_message(f"Deleted all {entity_type.__name__} entities")
