"""Azure OpenAI chat completions using the openai SDK."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import openai

from ....core.domain.exceptions import ChatCompletionError, MissingConfigurationError
from ....core.ports.chat_port import ChatModelPort

if TYPE_CHECKING:
    from openai import AzureOpenAI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatConfig:
    """Connection settings for a chat deployment."""

    endpoint: str
    api_key: str
    deployment: str = "gpt-4.1"
    api_version: str = "2024-04-01-preview"
    temperature: float = 0.7
    max_tokens: int = 800
    timeout: float = 30.0


class AzureOpenAIChatAdapter(ChatModelPort):
    """Chat-completion client bound to an Azure OpenAI resource."""

    def __init__(self, config: ChatConfig) -> None:
        """Initialize the adapter.

        Args:
            config: Endpoint, key and default deployment.

        Raises:
            MissingConfigurationError: If endpoint or api key is empty.
        """
        missing = [name for name in ("endpoint", "api_key") if not getattr(config, name)]
        if missing:
            raise MissingConfigurationError(
                "Azure OpenAI configuration is missing. Please set OPENAI_ENDPOINT and "
                "OPENAI_API_KEY.",
                context={"missing": missing},
            )
        self.config = config
        self._client: AzureOpenAI | None = None

    def _get_client(self) -> "AzureOpenAI":
        """Lazy load the SDK client."""
        if self._client is None:
            self._client = openai.AzureOpenAI(
                azure_endpoint=self.config.endpoint,
                api_key=self.config.api_key,
                api_version=self.config.api_version,
                timeout=self.config.timeout,
                max_retries=0,
            )
            logger.info("Azure OpenAI chat client initialized for %s", self.config.endpoint)
        return self._client

    def complete(self, prompt: str, deployment: str | None = None) -> str | None:
        """Send the rendered prompt as a single user message.

        Args:
            prompt: Fully rendered prompt text.
            deployment: Deployment to call; defaults to the configured one.

        Returns:
            The completion text, or None when the model returned no content.

        Raises:
            ChatCompletionError: If the SDK call fails.
        """
        deployment = deployment or self.config.deployment
        client = self._get_client()

        try:
            response = client.chat.completions.create(
                model=deployment,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except openai.OpenAIError as e:
            raise ChatCompletionError(
                f"Chat completion failed: {e}",
                cause=e,
                context={"deployment": deployment},
            ) from e

        if not response.choices:
            return None
        return response.choices[0].message.content
