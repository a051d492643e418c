"""Remote backend exceptions for the RAG chat service."""

from .base import RagChatError


class BackendUnavailableError(RagChatError):
    """A remote model backend failed or answered with a non-success status.

    Common causes:
    - Invalid endpoint or API key
    - Network issues
    - Deployment not found or throttled
    """

    error_code = "RC_BKD_001"


class MalformedResponseError(RagChatError):
    """A backend response could not be parsed into the expected shape."""

    error_code = "RC_BKD_002"
