"""Azure OpenAI embeddings over the REST API."""

import logging
from dataclasses import dataclass
from typing import Any

import requests

from ....core.domain.exceptions import (
    EmbeddingBackendError,
    EmptyPromptError,
    MalformedResponseError,
    MissingConfigurationError,
)
from ....core.ports.embedding_port import EmbeddingPort

logger = logging.getLogger(__name__)

# Constants
REQUEST_TIMEOUT = 30
MAX_ERROR_BODY = 2000
AUTH_API_KEY = "api-key"
AUTH_BEARER = "bearer"


@dataclass(frozen=True)
class EmbeddingConfig:
    """Connection settings for an embedding deployment."""

    endpoint: str
    api_key: str
    deployment: str = "text-embedding-ada-002"
    api_version: str = "2024-04-01-preview"
    auth_mode: str = AUTH_API_KEY
    timeout: float = REQUEST_TIMEOUT


class AzureOpenAIEmbeddingAdapter(EmbeddingPort):
    """Embedding client for an Azure OpenAI deployment.

    One HTTP round trip per call: no retry, no backoff, no cache. The
    underlying session is created once and shared by all callers.
    """

    def __init__(self, config: EmbeddingConfig, session: requests.Session | None = None) -> None:
        """Initialize the client.

        Args:
            config: Endpoint, key and deployment to use.
            session: Optional pre-built HTTP session (tests inject a mock).

        Raises:
            MissingConfigurationError: If endpoint or api key is empty.
        """
        missing = [name for name in ("endpoint", "api_key") if not getattr(config, name)]
        if missing:
            raise MissingConfigurationError(
                "Embedding configuration is missing. Please set OPENAI_ENDPOINT and OPENAI_API_KEY.",
                context={"missing": missing},
            )

        self.config = config
        self.endpoint = config.endpoint.rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update(self._auth_headers())

    def _auth_headers(self) -> dict[str, str]:
        if self.config.auth_mode == AUTH_BEARER:
            return {"Authorization": f"Bearer {self.config.api_key}"}
        return {"api-key": self.config.api_key}

    def __enter__(self) -> "AzureOpenAIEmbeddingAdapter":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close session."""
        self.close()

    def close(self) -> None:
        """Close the HTTP session."""
        if self.session:
            self.session.close()

    @property
    def url(self) -> str:
        """Embeddings endpoint of the configured deployment."""
        return (
            f"{self.endpoint}/openai/deployments/{self.config.deployment}"
            f"/embeddings?api-version={self.config.api_version}"
        )

    def get_embedding(self, text: str) -> list[float]:
        """Embed a text with the configured deployment.

        Args:
            text: Text to embed.

        Returns:
            The embedding vector.

        Raises:
            EmptyPromptError: If text is empty or whitespace only.
            EmbeddingBackendError: On transport failure or non-success status.
            MalformedResponseError: If the response carries no embedding.
        """
        if not text or not text.strip():
            raise EmptyPromptError("Input text for embedding cannot be null or empty.")

        payload = {"input": text, "model": self.config.deployment}
        try:
            response = self.session.post(self.url, json=payload, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise EmbeddingBackendError(
                f"Failed to get embedding from OpenAI: {e}",
                cause=e,
                context={"deployment": self.config.deployment},
            ) from e

        if not 200 <= response.status_code < 300:
            body = response.text[:MAX_ERROR_BODY]
            logger.error(
                "Embedding request failed. Status: %s, Body: %s", response.status_code, body
            )
            raise EmbeddingBackendError(
                f"Failed to get embedding from OpenAI: HTTP {response.status_code}",
                context={
                    "deployment": self.config.deployment,
                    "status_code": response.status_code,
                    "body": body,
                },
            )

        return self._parse_embedding(response)

    def _parse_embedding(self, response: requests.Response) -> list[float]:
        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Embedding response is not valid JSON.", cause=e
            ) from e

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list) or not data:
            raise MalformedResponseError("No embedding data returned from OpenAI.")

        embedding = data[0].get("embedding") if isinstance(data[0], dict) else None
        if not isinstance(embedding, list) or not embedding:
            raise MalformedResponseError("No embedding data returned from OpenAI.")

        try:
            return [float(value) for value in embedding]
        except (TypeError, ValueError) as e:
            raise MalformedResponseError(
                "Embedding contains non-numeric values.", cause=e
            ) from e
