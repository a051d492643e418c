"""Unit tests for the Azure OpenAI chat adapter.

The SDK client class is patched, so no request leaves the process.
"""

from unittest.mock import MagicMock, patch

import openai
import pytest

from ragchat.adapters.outbound.llm.azure_openai_chat import AzureOpenAIChatAdapter, ChatConfig
from ragchat.core.domain.exceptions import ChatCompletionError, MissingConfigurationError

pytestmark = pytest.mark.unit


def completion(content):
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


@pytest.fixture
def config():
    return ChatConfig(endpoint="https://test.openai.azure.com", api_key="key", deployment="gpt-4.1")


@pytest.fixture
def sdk_client():
    with patch("openai.AzureOpenAI") as client_cls:
        yield client_cls


class TestAzureOpenAIChatAdapter:
    def test_missing_config_raises(self):
        with pytest.raises(MissingConfigurationError):
            AzureOpenAIChatAdapter(ChatConfig(endpoint="", api_key=""))

    def test_client_is_created_lazily(self, config, sdk_client):
        adapter = AzureOpenAIChatAdapter(config)
        sdk_client.assert_not_called()

        sdk_client.return_value.chat.completions.create.return_value = completion("hi")
        adapter.complete("Hello")
        adapter.complete("Hello again")

        sdk_client.assert_called_once_with(
            azure_endpoint="https://test.openai.azure.com",
            api_key="key",
            api_version="2024-04-01-preview",
            timeout=30.0,
            max_retries=0,
        )

    def test_sends_single_user_message(self, config, sdk_client):
        create = sdk_client.return_value.chat.completions.create
        create.return_value = completion("An answer")

        answer = AzureOpenAIChatAdapter(config).complete("rendered prompt", deployment="gpt-4")

        assert answer == "An answer"
        create.assert_called_once_with(
            model="gpt-4",
            messages=[{"role": "user", "content": "rendered prompt"}],
            temperature=0.7,
            max_tokens=800,
        )

    def test_defaults_to_configured_deployment(self, config, sdk_client):
        create = sdk_client.return_value.chat.completions.create
        create.return_value = completion("ok")

        AzureOpenAIChatAdapter(config).complete("prompt")

        assert create.call_args.kwargs["model"] == "gpt-4.1"

    def test_no_choices_returns_none(self, config, sdk_client):
        response = MagicMock()
        response.choices = []
        sdk_client.return_value.chat.completions.create.return_value = response

        assert AzureOpenAIChatAdapter(config).complete("prompt") is None

    def test_sdk_error_raises_chat_completion_error(self, config, sdk_client):
        sdk_client.return_value.chat.completions.create.side_effect = openai.OpenAIError("denied")

        with pytest.raises(ChatCompletionError) as exc_info:
            AzureOpenAIChatAdapter(config).complete("prompt")

        assert exc_info.value.extra_context["deployment"] == "gpt-4.1"
