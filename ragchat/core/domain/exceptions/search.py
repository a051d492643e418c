"""Search index exceptions for the RAG chat service."""

from typing import Any

from .base import RagChatError


class SearchIndexError(RagChatError):
    """Base error for search index operations."""

    error_code = "RC_SRC_001"


class SearchFailedError(SearchIndexError):
    """Hybrid search request was rejected by the search service.

    Carries the HTTP status and raw body for diagnostics. ``status_code`` is
    None when the request never got a response.
    """

    error_code = "RC_SRC_002"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        merged = {"status_code": status_code, "body": body}
        merged.update(context or {})
        super().__init__(message, cause=cause, context=merged)
        self.status_code = status_code
        self.body = body


class IndexingFailedError(SearchIndexError):
    """Document upload batch was rejected by the search service."""

    error_code = "RC_SRC_003"
