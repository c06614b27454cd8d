from apps.cli.utils import exit_on_error
from search_repo.console_reporter import ConsoleReporter
from search_repo.setup_index import setup_index
from search_repo.utils import load_entity_type

from .connection import CONNECTION_ARGUMENTS, DEFAULTS, confirm, connect

DEFINITION = {
    "name": "setup",
    "description": "Create the index of an entity type and put its mapping",
    "arguments": [
        *CONNECTION_ARGUMENTS,
        {
            "name": "delete",
            "action": "store_true",
            "required": False,
            "help": "Delete existing index before setup",
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
    assume_role: str | None = None,
    delete: bool = False,
    entity: str,
    no_confirm: bool = False,
    opensearch_host: str = DEFAULTS.host,
    opensearch_port: int = DEFAULTS.port,
    profile: str | None = None,
    refresh_policy: str = DEFAULTS.refresh_policy.value,
    region: str = DEFAULTS.region,
) -> None:
    """
    Main entry point for the setup command.

    Args:
        assume_role: AWS role to assume for OpenSearch operations
        delete: Delete existing index before setup
        entity: Entity class as 'package.module:ClassName'
        no_confirm: Skip confirmation prompts
        opensearch_host: OpenSearch host
        opensearch_port: OpenSearch port
        profile: AWS profile to use
        refresh_policy: Unused, accepted for symmetry with the other commands
        region: AWS region
    """
    reporter = ConsoleReporter()

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

        if delete and not no_confirm and opensearch.operations.index_exists(entity_type):
            confirm(
                f"\nAre you sure you want to permanently delete the existing index of "
                f"{entity_type.__name__} and its content?",
                reporter=reporter,
            )

        if not setup_index(
            delete=delete,
            entity_type=entity_type,
            opensearch=opensearch,
            reporter=reporter,
        ):
            reporter.on_message(
                f"Index of {entity_type.__name__} already exists, skipping. "
                "(use --delete to delete and recreate)"
            )

        reporter.on_message("Setup completed successfully!")
