"""Configuration management for the RAG chat service."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..adapters.outbound.embedding.azure_openai_embedding import EmbeddingConfig
from ..adapters.outbound.llm.azure_openai_chat import ChatConfig
from ..adapters.outbound.search.azure_search_adapter import SearchConfig
from ..core.domain.exceptions import MissingConfigurationError


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Values copied out of portals or settings files may carry BOM characters
    that break HTTP headers.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


def _require(values: dict[str, str], what: str) -> None:
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise MissingConfigurationError(
            f"{what} configuration is missing. Please set {', '.join(missing)}.",
            context={"missing": missing},
        )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Azure OpenAI
    openai_endpoint: str = ""
    openai_api_key: str = ""
    openai_api_version: str = "2024-04-01-preview"
    openai_embedding_deployment: str = "text-embedding-ada-002"
    openai_chat_deployment: str = "gpt-4.1"
    openai_auth_mode: str = "api-key"

    # Azure AI Search
    azure_search_endpoint: str = ""
    azure_search_index: str = ""
    azure_search_api_key: str = ""
    azure_search_api_version: str = "2024-03-01-Preview"
    search_vector_field: str = "content_vector"

    @field_validator(
        "openai_endpoint",
        "openai_api_key",
        "azure_search_endpoint",
        "azure_search_api_key",
        mode="after",
    )
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    # Chat settings
    chat_temperature: float = 0.7
    chat_max_tokens: int = 800

    # RAG settings
    top_k_results: int = 3
    request_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_file: Path | None = None
    log_json: bool = False
    debug: bool = False

    def embedding_config(self) -> EmbeddingConfig:
        """Embedding deployment settings.

        Raises:
            MissingConfigurationError: If endpoint or key is not set.
        """
        _require(
            {"OPENAI_ENDPOINT": self.openai_endpoint, "OPENAI_API_KEY": self.openai_api_key},
            "Azure OpenAI",
        )
        return EmbeddingConfig(
            endpoint=self.openai_endpoint,
            api_key=self.openai_api_key,
            deployment=self.openai_embedding_deployment,
            api_version=self.openai_api_version,
            auth_mode=self.openai_auth_mode,
            timeout=self.request_timeout,
        )

    def search_config(self) -> SearchConfig:
        """Search index settings.

        Raises:
            MissingConfigurationError: If endpoint, index or key is not set.
        """
        _require(
            {
                "AZURE_SEARCH_ENDPOINT": self.azure_search_endpoint,
                "AZURE_SEARCH_INDEX": self.azure_search_index,
                "AZURE_SEARCH_API_KEY": self.azure_search_api_key,
            },
            "Azure AI Search",
        )
        return SearchConfig(
            endpoint=self.azure_search_endpoint,
            index_name=self.azure_search_index,
            api_key=self.azure_search_api_key,
            api_version=self.azure_search_api_version,
            vector_field=self.search_vector_field,
            timeout=self.request_timeout,
        )

    def chat_config(self) -> ChatConfig:
        """Chat deployment settings.

        Raises:
            MissingConfigurationError: If endpoint or key is not set.
        """
        _require(
            {"OPENAI_ENDPOINT": self.openai_endpoint, "OPENAI_API_KEY": self.openai_api_key},
            "Azure OpenAI",
        )
        return ChatConfig(
            endpoint=self.openai_endpoint,
            api_key=self.openai_api_key,
            deployment=self.openai_chat_deployment,
            api_version=self.openai_api_version,
            temperature=self.chat_temperature,
            max_tokens=self.chat_max_tokens,
            timeout=self.request_timeout,
        )


# Global settings instance
settings = Settings()
