from apps.cli.utils import exit_on_error, parse_json_column
from search_repo.console_reporter import ConsoleReporter
from search_repo.data_reader import DataReader, TransformationParams
from search_repo.ingest import BATCH_SIZE, ingest
from search_repo.opensearch.entities import RefreshPolicy
from search_repo.utils import load_entity_type

from .connection import CONNECTION_ARGUMENTS, DEFAULTS, connect

DEFINITION = {
    "name": "ingest",
    "description": "Ingest entities from a file",
    "arguments": [
        *CONNECTION_ARGUMENTS,
        {
            "name": "batch-size",
            "type": int,
            "required": False,
            "default": BATCH_SIZE,
            "help": f"Number of entities per bulk request (default: {BATCH_SIZE})",
        },
        {
            "name": "file",
            "type": str,
            "required": True,
            "help": "Excel (.xlsx, .xls), CSV (.csv) or JSON lines (.jsonl, .ndjson) file to import",
        },
        {
            "name": "json-columns",
            "type": str,
            "nargs": "+",
            "required": False,
            "default": [],
            "help": "Columns holding JSON encoded values (lists, objects)",
        },
        {
            "name": "limit-rows",
            "type": int,
            "required": False,
            "help": "Limit the number of rows to process (after skipping rows)",
        },
        {
            "name": "skip-rows",
            "type": int,
            "required": False,
            "default": 0,
            "help": "Number of rows to skip at the beginning (for resuming ingestion)",
        },
    ],
}


def main(
    *,
    assume_role: str | None = None,
    batch_size: int = BATCH_SIZE,
    entity: str,
    file: str,
    json_columns: list[str] | None = None,
    limit_rows: int | None = None,
    opensearch_host: str = DEFAULTS.host,
    opensearch_port: int = DEFAULTS.port,
    profile: str | None = None,
    refresh_policy: str = DEFAULTS.refresh_policy.value,
    region: str = DEFAULTS.region,
    skip_rows: int = 0,
) -> None:
    """
    Main entry point for the ingest command.

    Args:
        assume_role: AWS role to assume for OpenSearch operations
        batch_size: Number of entities per bulk request
        entity: Entity class as 'package.module:ClassName'
        file: Excel, CSV or JSON lines file to import
        json_columns: Columns holding JSON encoded values
        limit_rows: Limit the number of rows to process (after skipping rows)
        opensearch_host: OpenSearch host
        opensearch_port: OpenSearch port
        profile: AWS profile to use
        refresh_policy: When writes become visible to searches
        region: AWS region
        skip_rows: Number of rows to skip at the beginning
    """
    reporter = ConsoleReporter()
    transformations: list[TransformationParams] = []
    if json_columns:
        transformations.append(
            {"columns": json_columns, "callback": lambda value, _: parse_json_column(value)}
        )

    with exit_on_error(reporter):
        entity_type = load_entity_type(entity)
        reader = DataReader(
            file_path=file,
            limit_rows=limit_rows,
            skip_rows=skip_rows,
            reporter=reporter,
            transformations=transformations,
        )
        opensearch = connect(
            assume_role=assume_role,
            opensearch_host=opensearch_host,
            opensearch_port=opensearch_port,
            profile=profile,
            region=region,
            reporter=reporter,
        )
        ingest(
            batch_size=batch_size,
            entity_type=entity_type,
            reporter=reporter,
            repository=opensearch.repository(
                entity_type, refresh_policy=RefreshPolicy(refresh_policy)
            ),
            rows=reader.records(),
        )
