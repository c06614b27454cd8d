import os
import re
from types import TracebackType
from typing import Self, TypeVar

from botocore.credentials import Credentials
from opensearchpy import AWSV4SignerAuth, OpenSearch, RequestsHttpConnection
from opensearchpy.exceptions import AuthorizationException
from pydantic import BaseModel

from search_repo.exceptions import SearchBackendConnectionError
from search_repo.interfaces import IReporter
from search_repo.logging import get_logger
from search_repo.opensearch.entities import EntityInformation, RefreshPolicy
from search_repo.opensearch.repositories import IndexRepository, SimpleDocumentRepository
from search_repo.opensearch.services import OpenSearchOperations

T = TypeVar("T", bound=BaseModel)

logger = get_logger(__name__)

# Host suffix of managed domains -> service name used to sign requests
AWS_SERVICES = {
    ".es.amazonaws.com": "es",
    ".es.amazonaws.com.cn": "es",
    ".aoss.amazonaws.com": "aoss",
}


def aws_service_name(host: str) -> str | None:
    """Return the signing service of a managed OpenSearch host, or None."""
    hostname = re.sub(r"^https?://", "", host).split(":")[0].rstrip("/")
    for suffix, service in AWS_SERVICES.items():
        if hostname.endswith(suffix):
            return service
    return None


class OpenSearchClient:
    """Connection to an OpenSearch cluster and factory of its repositories.

    Requests to managed domains are signed with SigV4 when ``credentials``
    are given; other hosts are reached without authentication.
    """

    def __init__(
        self,
        *,
        credentials: Credentials | None = None,
        host: str,
        port: int = 443,
        region: str = "us-east-1",
        reporter: IReporter,
        timeout: int = 60,
        use_ssl: bool = False,
    ) -> None:
        self._host = re.sub(r"^https?://", "", host)
        self._port = port
        self._region = region
        self._reporter = reporter
        self._credentials = credentials
        self._timeout = timeout
        self._use_ssl = use_ssl
        self.cluster_name: str | None = None
        self._client = self._connect()

        self.indexes = IndexRepository(client=self._client)
        self.operations = OpenSearchOperations(client=self._client, indexes=self.indexes)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the pooled HTTP connections."""
        self._client.close()

    def _connect(self) -> OpenSearch:
        service = aws_service_name(self._host)
        if self._credentials is not None and service is not None:
            http_auth = AWSV4SignerAuth(self._credentials, self._region, service)
            use_ssl = True
        else:
            http_auth = None
            use_ssl = self._use_ssl

        client = OpenSearch(
            hosts=[{"host": self._host, "port": self._port}],
            http_compress=True,
            http_auth=http_auth,
            use_ssl=use_ssl,
            verify_certs=use_ssl,
            ssl_assert_hostname=False,
            ssl_show_warn=False,
            connection_class=RequestsHttpConnection,
            timeout=self._timeout,
        )
        self._test_connection(client)
        return client

    def _test_connection(self, client: OpenSearch) -> None:
        try:
            info = client.info()
        except AuthorizationException as e:
            # A 403 on cluster info is tolerated inside AWS runtimes
            if "AWS_EXECUTION_ENV" in os.environ:
                self._reporter.on_message("Skipping connection test")
                return
            raise SearchBackendConnectionError(
                f"Authentication successful but access denied (403). "
                f"Please check the OpenSearch domain's resource-based access policy. "
                f"The user/role needs 'es:ESHttp*' permissions. "
                f"Error details: {getattr(e, 'info', None) or 'Access denied'}"
            ) from e
        except Exception as e:
            raise SearchBackendConnectionError(
                f"Failed to connect to OpenSearch at {self._host}:{self._port}: "
                f"{type(e).__name__}: {e}"
            ) from e

        self.cluster_name = info.get("cluster_name")
        logger.info(
            "Connected to OpenSearch cluster %s at %s:%s", self.cluster_name, self._host, self._port
        )
        self._reporter.on_message(f"Connected to OpenSearch cluster: {self.cluster_name}")

    def repository(
        self,
        entity_type: type[T],
        *,
        refresh_policy: RefreshPolicy = RefreshPolicy.IMMEDIATE,
    ) -> SimpleDocumentRepository[T]:
        """Create a document repository for ``entity_type``.

        The index of the entity type is created, with its mapping, if it does
        not exist yet.
        """
        return SimpleDocumentRepository(
            operations=self.operations,
            entity_information=EntityInformation(entity_type),
            refresh_policy=refresh_policy,
        )
