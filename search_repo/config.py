"""Connection and repository settings.

Values are read from environment variables with the ``OPENSEARCH_`` prefix,
e.g. ``OPENSEARCH_HOST`` or ``OPENSEARCH_REFRESH_POLICY=deferred``, and fall
back to the defaults below.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from search_repo.logging import LogLevel
from search_repo.opensearch.client import aws_service_name
from search_repo.opensearch.entities import RefreshPolicy


class OpenSearchSettings(BaseSettings):
    """Settings for connecting to OpenSearch and writing documents."""

    model_config = SettingsConfigDict(env_prefix="OPENSEARCH_", extra="ignore")

    host: str = Field(default="localhost", description="OpenSearch host, with or without scheme")
    port: int = Field(default=9200, description="OpenSearch port")
    region: str = Field(default="us-east-1", description="AWS region of a managed domain")
    profile: str | None = Field(default=None, description="AWS profile to use")
    assume_role: str | None = Field(default=None, description="IAM role ARN to assume")
    use_ssl: bool = Field(default=False, description="Use TLS for non-AWS hosts")
    timeout: int = Field(default=60, gt=0, description="Request timeout in seconds")
    refresh_policy: RefreshPolicy = Field(
        default=RefreshPolicy.IMMEDIATE, description="When writes become visible to searches"
    )
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")

    @property
    def is_aws_domain(self) -> bool:
        return aws_service_name(self.host) is not None
