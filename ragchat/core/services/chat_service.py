"""Chat orchestration with optional retrieval-augmented context."""

import logging
from typing import Generic, TypeVar

from ..domain import AvailableModel, RagChatAnswer, get_deployment_name
from ..domain.exceptions import (
    BackendUnavailableError,
    ChatCompletionError,
    ConfigurationError,
    EmptyPromptError,
)
from ..ports.chat_port import ChatModelPort
from .prompts import CHAT_WITH_CONTEXT, PromptTemplate
from .rag_context_service import RagContextService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ChatService(Generic[T]):
    """Answers prompts with a chat model, optionally grounded on retrieved documents.

    Every call is an independent linear pipeline:
    validate -> (embed -> search -> assemble) -> render -> invoke -> return.
    The service holds no request state and is safe to share between threads.
    """

    def __init__(
        self,
        chat_model: ChatModelPort,
        rag_context: RagContextService[T] | None = None,
        default_deployment: str | None = None,
        template: PromptTemplate = CHAT_WITH_CONTEXT,
    ) -> None:
        """Initialize the chat service.

        Args:
            chat_model: Backend that produces completions.
            rag_context: Context retrieval service. None builds a plain chat
                service whose RAG methods raise ConfigurationError.
            default_deployment: Configured chat deployment. When set, every call
                uses it and the model argument only labels the call.
            template: Prompt template with ``context`` and ``user_input`` slots.
        """
        self.chat_model = chat_model
        self.rag_context = rag_context
        self.default_deployment = default_deployment
        self._chat_with_context = template

    def _resolve_deployment(self, model: AvailableModel | str | None) -> str | None:
        # A configured deployment always wins; the model only labels the call
        if self.default_deployment:
            if model is not None:
                logger.debug(
                    "Model %s requested; using configured deployment %s",
                    get_deployment_name(model),
                    self.default_deployment,
                )
            return self.default_deployment
        if model is None:
            return None
        return get_deployment_name(model)

    @staticmethod
    def _validate_prompt(prompt: str) -> None:
        if not prompt or not prompt.strip():
            logger.warning("Prompt cannot be empty.")
            raise EmptyPromptError("Prompt cannot be empty.")

    def get_chat_completion(
        self,
        prompt: str,
        model: AvailableModel | str | None = None,
        context: str = "",
    ) -> str:
        """Get a chat completion for the prompt with optional context.

        Args:
            prompt: User prompt.
            model: Model identifier, resolved through the lookup table only when
                no deployment is configured.
            context: Text placed ahead of the user turn.

        Returns:
            The model's answer, or an empty string if it returned nothing.

        Raises:
            EmptyPromptError: If the prompt is empty or whitespace only.
            BackendUnavailableError: If the chat model call fails.
        """
        self._validate_prompt(prompt)

        rendered = self._chat_with_context.render(context=context or "", user_input=prompt)
        deployment = self._resolve_deployment(model)

        try:
            result = self.chat_model.complete(rendered, deployment=deployment)
        except BackendUnavailableError:
            logger.exception("Error during chat completion. Prompt: %s", prompt)
            raise
        except Exception as e:
            logger.exception("Error during chat completion. Prompt: %s", prompt)
            raise ChatCompletionError(
                "Chat completion failed",
                cause=e,
                context={"deployment": deployment, "template": self._chat_with_context.name},
            ) from e

        return result or ""

    def get_rag_chat_completion(
        self,
        prompt: str,
        model: AvailableModel | str | None = None,
        top_k: int = 3,
    ) -> str:
        """Get a RAG chat completion for the prompt, without citations."""
        return self.get_rag_chat_completion_with_citations(prompt, model, top_k).answer

    def get_rag_chat_completion_with_citations(
        self,
        prompt: str,
        model: AvailableModel | str | None = None,
        top_k: int = 3,
    ) -> RagChatAnswer[T]:
        """Get a RAG chat completion together with the documents it used.

        Args:
            prompt: User prompt.
            model: Model identifier, resolved through the lookup table only when
                no deployment is configured.
            top_k: Maximum number of documents to retrieve.

        Returns:
            RagChatAnswer whose citations are exactly the search results.

        Raises:
            EmptyPromptError: If the prompt is empty or whitespace only.
            ConfigurationError: If this service has no context retrieval.
        """
        self._validate_prompt(prompt)

        if self.rag_context is None:
            raise ConfigurationError("RAG context retrieval is not configured for this chat service.")

        try:
            context_result = self.rag_context.get_context_with_citations(prompt, top_k)
        except Exception:
            logger.exception("Error during RAG context retrieval. Prompt: %s", prompt)
            raise

        if not context_result.context.strip():
            logger.warning("AI Search returned empty context for prompt: %s", prompt)
        elif not context_result.citations:
            logger.warning("AI Search returned no results for prompt: %s", prompt)
        else:
            logger.info(
                "AI Search returned %d results for prompt: %s",
                len(context_result.citations),
                prompt,
            )

        answer = self.get_chat_completion(prompt, model, context_result.context)
        return RagChatAnswer(answer=answer, citations=context_result.citations)
