"""Azure AI Search index adapter.

Hybrid search is sent as ONE raw request carrying both the lexical query and
the vector query, so the service's own rank fusion decides the order. Results
are never re-ranked client-side.
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

import requests

from ....core.domain.exceptions import (
    IndexingFailedError,
    InvalidArgumentError,
    MalformedResponseError,
    MissingConfigurationError,
    SearchFailedError,
)
from ....core.ports.document_codec import DocumentCodec
from ....core.ports.search_port import SearchIndexPort

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Constants
REQUEST_TIMEOUT = 30
SEARCH_API_VERSION = "2024-03-01-Preview"
VECTOR_FIELD = "content_vector"
MAX_ERROR_BODY = 2000


@dataclass(frozen=True)
class SearchConfig:
    """Connection settings for a search index."""

    endpoint: str
    index_name: str
    api_key: str
    api_version: str = SEARCH_API_VERSION
    vector_field: str = VECTOR_FIELD
    timeout: float = REQUEST_TIMEOUT


class AzureSearchAdapter(SearchIndexPort[T]):
    """Upload and hybrid search against one Azure AI Search index."""

    def __init__(
        self,
        config: SearchConfig,
        codec: DocumentCodec[T],
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Endpoint, index and key to use.
            codec: Codec of the indexed document type.
            session: Optional pre-built HTTP session (tests inject a mock).

        Raises:
            MissingConfigurationError: If endpoint, index or key is empty.
        """
        missing = [
            name for name in ("endpoint", "index_name", "api_key") if not getattr(config, name)
        ]
        if missing:
            raise MissingConfigurationError(
                "Azure AI Search configuration is missing. Please set AZURE_SEARCH_ENDPOINT, "
                "AZURE_SEARCH_INDEX, and AZURE_SEARCH_API_KEY.",
                context={"missing": missing},
            )

        self.config = config
        self.codec = codec
        self.endpoint = config.endpoint.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({"api-key": config.api_key})

    def __enter__(self) -> "AzureSearchAdapter[T]":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close session."""
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    def _url(self, operation: str) -> str:
        return (
            f"{self.endpoint}/indexes/{self.config.index_name}/docs/{operation}"
            f"?api-version={self.config.api_version}"
        )

    def upload(self, documents: Iterable[T | None]) -> int:
        """Upsert documents with one "upload" batch.

        Args:
            documents: Documents to upload; None entries are skipped.

        Returns:
            Number of documents sent.

        Raises:
            InvalidArgumentError: If documents is None.
            IndexingFailedError: If the service rejects the batch or any item in it.
        """
        if documents is None:
            raise InvalidArgumentError("Documents to upload cannot be None.")

        actions = [
            {"@search.action": "upload", **self.codec.to_payload(document)}
            for document in documents
            if document is not None
        ]
        if not actions:
            logger.info("No documents to upload to index %s", self.config.index_name)
            return 0

        try:
            response = self.session.post(
                self._url("index"), json={"value": actions}, timeout=self.config.timeout
            )
        except requests.RequestException as e:
            raise IndexingFailedError(
                f"Azure AI Search indexing failed: {e}",
                cause=e,
                context={"index": self.config.index_name, "documents": len(actions)},
            ) from e

        if not 200 <= response.status_code < 300:
            raise IndexingFailedError(
                f"Azure AI Search indexing failed. Status: {response.status_code}",
                context={
                    "index": self.config.index_name,
                    "status_code": response.status_code,
                    "body": response.text[:MAX_ERROR_BODY],
                },
            )

        # 207 Multi-Status: some items were rejected
        if response.status_code == 207:
            failed = self._failed_keys(response)
            raise IndexingFailedError(
                f"Azure AI Search rejected {len(failed)} of {len(actions)} documents",
                context={"index": self.config.index_name, "failed_keys": failed},
            )

        logger.info("Uploaded %d documents to index %s", len(actions), self.config.index_name)
        return len(actions)

    @staticmethod
    def _failed_keys(response: requests.Response) -> list[str]:
        try:
            results = response.json().get("value", [])
        except (ValueError, AttributeError):
            return []
        return [item.get("key") for item in results if not item.get("status", False)]

    def hybrid_search(self, query: str, vector: list[float], top_k: int = 3) -> list[T]:
        """Run a combined lexical + vector query.

        Args:
            query: Lexical search text.
            vector: Query embedding, same dimension as the vector field.
            top_k: Number of neighbours requested and maximum results returned.

        Returns:
            Up to ``top_k`` documents in the service's ranking order.

        Raises:
            InvalidArgumentError: If top_k is less than 1.
            SearchFailedError: On transport failure or non-success status.
            MalformedResponseError: If the body or an entry cannot be decoded.
        """
        if top_k < 1:
            raise InvalidArgumentError("top_k must be at least 1.", context={"top_k": top_k})

        url = self._url("search")
        request_body = {
            "search": query,
            "vectorQueries": [
                {
                    "vector": vector,
                    "fields": self.config.vector_field,
                    "k": top_k,
                    "kind": "vector",
                }
            ],
            "top": top_k,
        }

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Azure AI Search HybridSearch Request URL: %s", url)
            logger.debug("Azure AI Search HybridSearch Request Headers: api-key=***")
            logger.debug("Azure AI Search HybridSearch Request Body: %s", json.dumps(request_body))

        try:
            response = self.session.post(url, json=request_body, timeout=self.config.timeout)
        except requests.RequestException as e:
            logger.error("Error performing hybrid search on Azure AI Search: %s", e)
            raise SearchFailedError(
                f"Azure AI Search HybridSearch failed: {e}",
                cause=e,
                context={"index": self.config.index_name},
            ) from e

        if not 200 <= response.status_code < 300:
            body = response.text[:MAX_ERROR_BODY]
            logger.error(
                "Azure AI Search HybridSearch failed. Status: %s, Body: %s",
                response.status_code,
                body,
            )
            raise SearchFailedError(
                f"Azure AI Search HybridSearch failed. Status: {response.status_code}",
                status_code=response.status_code,
                body=body,
                context={"index": self.config.index_name},
            )

        return self._parse_results(response)[:top_k]

    def _parse_results(self, response: requests.Response) -> list[T]:
        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Azure AI Search response is not valid JSON.", cause=e
            ) from e

        hits = body.get("value") if isinstance(body, dict) else None
        if not isinstance(hits, list):
            raise MalformedResponseError("Azure AI Search response has no 'value' array.")

        return [self.codec.from_payload(hit) for hit in hits if hit is not None]
