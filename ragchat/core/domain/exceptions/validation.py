"""Input validation exceptions for the RAG chat service."""

from .base import RagChatError


class InvalidArgumentError(RagChatError):
    """A caller supplied an argument the pipeline cannot work with.

    Raised before any network call is made.
    """

    error_code = "RC_VAL_001"


class EmptyPromptError(InvalidArgumentError):
    """Prompt cannot be empty or whitespace only."""

    error_code = "RC_VAL_002"
