"""Chat model exceptions for the RAG chat service."""

from .backend import BackendUnavailableError


class ChatCompletionError(BackendUnavailableError):
    """Chat deployment failed to produce a completion.

    Common causes:
    - Invalid API key or deployment name
    - Content filtered by the provider
    - Token limit exceeded
    """

    error_code = "RC_LLM_001"
