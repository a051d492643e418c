"""Custom exception hierarchy for the RAG chat service.

Each exception includes an error code, the location it was raised from,
optional cause chaining and JSON serialization for structured logging.

All exceptions are re-exported here:

    from ragchat.core.domain.exceptions import RagChatError, SearchFailedError
"""

# Base classes
from .base import ExceptionContext, RagChatError

# Backend exceptions
from .backend import BackendUnavailableError, MalformedResponseError

# Configuration exceptions
from .configuration import ConfigurationError, MissingConfigurationError

# Embedding exceptions
from .embedding import EmbeddingBackendError

# Chat model exceptions
from .llm import ChatCompletionError

# Search index exceptions
from .search import IndexingFailedError, SearchFailedError, SearchIndexError

# Validation exceptions
from .validation import EmptyPromptError, InvalidArgumentError

__all__ = [
    # Base
    "ExceptionContext",
    "RagChatError",
    # Validation
    "InvalidArgumentError",
    "EmptyPromptError",
    # Configuration
    "ConfigurationError",
    "MissingConfigurationError",
    # Backend
    "BackendUnavailableError",
    "MalformedResponseError",
    "EmbeddingBackendError",
    "ChatCompletionError",
    # Search
    "SearchIndexError",
    "SearchFailedError",
    "IndexingFailedError",
]
