"""Embedding exceptions for the RAG chat service."""

from .backend import BackendUnavailableError


class EmbeddingBackendError(BackendUnavailableError):
    """Embedding deployment returned an error or could not be reached."""

    error_code = "RC_EMB_001"
