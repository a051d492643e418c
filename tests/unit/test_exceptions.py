"""Unit tests for exception handling system.

Tests both the exception hierarchy and the exception handler utilities,
including the HTTP status mapping used by the API.
"""

import json

import pytest

from ragchat.common.exception_handler import (
    GENERIC_ERROR_MESSAGE,
    format_exception_json,
    get_http_status_code,
    get_public_message,
)
from ragchat.core.domain.exceptions import (
    BackendUnavailableError,
    ChatCompletionError,
    ConfigurationError,
    EmbeddingBackendError,
    EmptyPromptError,
    IndexingFailedError,
    InvalidArgumentError,
    MalformedResponseError,
    MissingConfigurationError,
    RagChatError,
    SearchFailedError,
    SearchIndexError,
)

# Apply @pytest.mark.unit to all tests in this module
pytestmark = pytest.mark.unit


class TestExceptionHierarchy:
    """Tests for the exception class hierarchy."""

    def test_rag_chat_error_is_base(self):
        """RagChatError should be the base for all custom exceptions."""
        for cls in (
            InvalidArgumentError,
            ConfigurationError,
            BackendUnavailableError,
            MalformedResponseError,
            SearchIndexError,
        ):
            assert issubclass(cls, RagChatError)

    def test_backend_errors(self):
        assert issubclass(EmbeddingBackendError, BackendUnavailableError)
        assert issubclass(ChatCompletionError, BackendUnavailableError)

    def test_search_errors_inherit_from_search_index_error(self):
        assert issubclass(SearchFailedError, SearchIndexError)
        assert issubclass(IndexingFailedError, SearchIndexError)

    def test_validation_errors(self):
        assert issubclass(EmptyPromptError, InvalidArgumentError)
        assert issubclass(ConfigurationError, InvalidArgumentError)
        assert issubclass(MissingConfigurationError, ConfigurationError)


class TestExceptionCreation:
    """Tests for creating and using exceptions."""

    def test_basic_exception_creation(self):
        exc = RagChatError("Test error message")
        assert str(exc) == "Test error message"
        assert exc.message == "Test error message"
        assert exc.error_code == "RC_ERR_001"

    def test_exception_with_cause(self):
        original = ConnectionError("Network unreachable")
        exc = EmbeddingBackendError("Embedding failed", cause=original)
        assert exc.cause is original

    def test_exception_captures_location(self):
        exc = RagChatError("Test")
        assert exc.location.file_name == "test_exceptions.py"
        assert exc.location.line_number > 0

    def test_search_failed_error_carries_status_and_body(self):
        exc = SearchFailedError("Search failed", status_code=403, body="Forbidden")
        assert exc.status_code == 403
        assert exc.body == "Forbidden"
        assert exc.extra_context["status_code"] == 403
        assert exc.extra_context["body"] == "Forbidden"

    def test_search_failed_error_without_response(self):
        exc = SearchFailedError("Search failed", context={"index": "projects"})
        assert exc.status_code is None
        assert exc.extra_context["index"] == "projects"

    def test_each_exception_has_unique_error_code(self):
        exceptions = [
            RagChatError("test"),
            InvalidArgumentError("test"),
            EmptyPromptError("test"),
            ConfigurationError("test"),
            MissingConfigurationError("test"),
            BackendUnavailableError("test"),
            MalformedResponseError("test"),
            EmbeddingBackendError("test"),
            ChatCompletionError("test"),
            SearchIndexError("test"),
            SearchFailedError("test"),
            IndexingFailedError("test"),
        ]
        codes = {exc.error_code for exc in exceptions}

        assert len(codes) == len(exceptions)


class TestExceptionToDict:
    """Tests for exception JSON serialization."""

    def test_to_dict_basic_structure(self):
        result = SearchFailedError("Test error", status_code=500).to_dict()

        assert result["error"] == {
            "type": "SearchFailedError",
            "code": "RC_SRC_002",
            "message": "Test error",
        }
        assert set(result["location"]) == {"class", "method", "file", "line", "timestamp"}
        assert result["context"]["status_code"] == 500

    def test_to_dict_includes_cause(self):
        exc = InvalidArgumentError("Invalid input", cause=ValueError("Bad value"))
        result = exc.to_dict()

        assert result["cause"] == {"type": "ValueError", "message": "Bad value"}

    def test_to_dict_excludes_trace_by_default(self):
        exc = InvalidArgumentError("Invalid input", cause=ValueError("Bad value"))
        assert "stack_trace" not in exc.to_dict()

    def test_to_dict_is_json_serializable(self):
        exc = IndexingFailedError("Upload failed", context={"failed_keys": ["p1", "p2"]})
        assert isinstance(json.dumps(exc.to_dict()), str)


class TestExceptionHandler:
    """Tests for exception handler utilities."""

    def test_format_custom_exception(self):
        result = format_exception_json(EmbeddingBackendError("Test error"))

        assert result["error"]["type"] == "EmbeddingBackendError"
        assert result["error"]["code"] == "RC_EMB_001"

    def test_format_standard_exception(self):
        try:
            raise ValueError("Standard error")
        except ValueError as e:
            result = format_exception_json(e)

        assert result["error"]["type"] == "ValueError"
        assert result["error"]["code"] == "PYTHON_ERR"
        assert result["error"]["message"] == "Standard error"
        assert result["location"]["method"] == "test_format_standard_exception"

    def test_format_adds_extra_context(self):
        exc = SearchFailedError("Test", context={"index": "projects"})
        result = format_exception_json(exc, extra_context={"endpoint": "/ragchat"})

        assert result["context"]["index"] == "projects"
        assert result["context"]["endpoint"] == "/ragchat"


class TestHTTPStatusCodes:
    """Tests for HTTP status code mapping."""

    def test_invalid_argument_returns_400(self):
        assert get_http_status_code(InvalidArgumentError("bad")) == 400
        assert get_http_status_code(EmptyPromptError("Prompt cannot be empty.")) == 400

    def test_configuration_error_returns_500(self):
        assert get_http_status_code(ConfigurationError("test")) == 500
        assert get_http_status_code(MissingConfigurationError("test")) == 500

    def test_backend_errors_return_500(self):
        assert get_http_status_code(EmbeddingBackendError("test")) == 500
        assert get_http_status_code(SearchFailedError("test", status_code=403)) == 500
        assert get_http_status_code(MalformedResponseError("test")) == 500

    def test_standard_exception_returns_500(self):
        assert get_http_status_code(RuntimeError("test")) == 500


class TestPublicMessage:
    """Only validation messages reach API clients."""

    def test_validation_message_is_passed_through(self):
        assert get_public_message(EmptyPromptError("Prompt cannot be empty.")) == (
            "Prompt cannot be empty."
        )

    def test_internal_details_are_hidden(self):
        exc = SearchFailedError("Status: 403", status_code=403, body="key=secret")
        assert get_public_message(exc) == GENERIC_ERROR_MESSAGE
        assert get_public_message(RuntimeError("boom")) == GENERIC_ERROR_MESSAGE
