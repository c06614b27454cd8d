"""Utility functions for the search repository CLI."""

import importlib

import boto3
from botocore.credentials import Credentials
from pydantic import BaseModel

from search_repo.config import OpenSearchSettings
from search_repo.exceptions import SearchBackendConnectionError
from search_repo.interfaces import IReporter
from search_repo.logging import get_logger
from search_repo.opensearch.client import OpenSearchClient

logger = get_logger(__name__)


def get_aws_credentials(
    *,
    profile: str | None = None,
    assume_role: str | None = None,
    region: str = "us-east-1",
    role_session_name: str = "search-repo",
) -> Credentials:
    """Get AWS credentials, optionally from a profile or by assuming a role.

    Args:
        profile: Optional AWS profile name
        assume_role: Optional IAM role ARN to assume
        region: AWS region (default: us-east-1)
        role_session_name: Name of the role session (default: search-repo)

    Returns:
        Credentials object

    Raises:
        Exception: If role assumption fails or credentials cannot be obtained

    """
    session = boto3.Session(profile_name=profile) if profile else boto3.Session()

    if assume_role:
        logger.info("Assuming role: %s", assume_role)
        sts_client = session.client("sts", region_name=region)

        try:
            response = sts_client.assume_role(
                RoleArn=assume_role,
                RoleSessionName=role_session_name,
            )
        except Exception as e:
            raise SearchBackendConnectionError(f"Failed to assume role {assume_role}: {e!s}") from e

        credentials = response["Credentials"]
        logger.info("Successfully assumed role: %s", assume_role)
        return Credentials(
            access_key=credentials["AccessKeyId"],
            secret_key=credentials["SecretAccessKey"],
            token=credentials["SessionToken"],
        )

    credentials = session.get_credentials()
    if credentials is None:
        raise SearchBackendConnectionError(
            "No AWS credentials found. Please configure AWS credentials or use --profile or --assume-role.",
        )
    return credentials


def get_opensearch_client(
    settings: OpenSearchSettings,
    *,
    reporter: IReporter,
) -> OpenSearchClient:
    """Create an OpenSearchClient from settings.

    AWS credentials are only looked up for AWS-managed domains.

    Args:
        settings: Connection settings
        reporter: Reporter for connection messages

    Returns:
        OpenSearchClient instance

    """
    credentials = None
    if settings.is_aws_domain:
        credentials = get_aws_credentials(
            profile=settings.profile,
            assume_role=settings.assume_role,
            region=settings.region,
        )

    return OpenSearchClient(
        credentials=credentials,
        host=settings.host,
        port=settings.port,
        region=settings.region,
        reporter=reporter,
        timeout=settings.timeout,
        use_ssl=settings.use_ssl,
    )


def load_entity_type(path: str) -> type[BaseModel]:
    """Import an entity class from a ``package.module:ClassName`` path.

    Raises:
        ValueError: If the path is malformed or does not name a pydantic model

    """
    module_name, _, class_name = path.partition(":")
    if not module_name or not class_name:
        raise ValueError(f"Invalid entity path '{path}', expected 'package.module:ClassName'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import module '{module_name}': {e}") from e

    entity_type = getattr(module, class_name, None)
    if not (isinstance(entity_type, type) and issubclass(entity_type, BaseModel)):
        raise ValueError(f"'{path}' is not a pydantic model class")
    return entity_type
