"""Connection arguments and helpers shared by every command."""

import sys

from search_repo.config import OpenSearchSettings
from search_repo.interfaces import IReporter
from search_repo.opensearch.client import OpenSearchClient
from search_repo.opensearch.entities import RefreshPolicy
from search_repo.utils import get_opensearch_client

DEFAULTS = OpenSearchSettings()

CONNECTION_ARGUMENTS = [
    {
        "name": "assume-role",
        "type": str,
        "required": False,
        "default": DEFAULTS.assume_role,
        "help": "AWS role to assume for OpenSearch operations",
    },
    {
        "name": "entity",
        "type": str,
        "required": True,
        "help": "Entity class as 'package.module:ClassName'",
    },
    {
        "name": "opensearch-host",
        "type": str,
        "required": False,
        "default": DEFAULTS.host,
        "help": f"OpenSearch host (default: {DEFAULTS.host})",
    },
    {
        "name": "opensearch-port",
        "type": int,
        "required": False,
        "default": DEFAULTS.port,
        "help": f"OpenSearch port (default: {DEFAULTS.port})",
    },
    {
        "name": "profile",
        "type": str,
        "required": False,
        "default": DEFAULTS.profile,
        "help": "AWS profile to use",
    },
    {
        "name": "refresh-policy",
        "type": str,
        "required": False,
        "choices": [policy.value for policy in RefreshPolicy],
        "default": DEFAULTS.refresh_policy.value,
        "help": f"When writes become visible to searches (default: {DEFAULTS.refresh_policy.value})",
    },
    {
        "name": "region",
        "type": str,
        "required": False,
        "default": DEFAULTS.region,
        "help": "AWS region",
    },
]


def connect(
    *,
    assume_role: str | None,
    opensearch_host: str,
    opensearch_port: int,
    profile: str | None,
    region: str,
    reporter: IReporter,
) -> OpenSearchClient:
    """Connect to OpenSearch, overriding the environment settings with CLI arguments."""
    settings = DEFAULTS.model_copy(
        update={
            "assume_role": assume_role,
            "host": opensearch_host,
            "port": opensearch_port,
            "profile": profile,
            "region": region,
        }
    )
    return get_opensearch_client(settings, reporter=reporter)


def confirm(prompt: str, *, reporter: IReporter) -> None:
    """Prompt user for confirmation."""
    confirmation = reporter.on_input(f"{prompt} (yes/no): ")
    if confirmation.lower() != "yes":
        reporter.on_message("Aborting...")
        sys.exit(0)
    else:
        reporter.on_message("Continuing...")
