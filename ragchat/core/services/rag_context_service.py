"""Context retrieval for retrieval-augmented generation."""

import logging
from typing import Generic, TypeVar

from ..domain import RagContextResult
from ..domain.exceptions import EmptyPromptError
from ..ports.document_codec import DocumentCodec
from ..ports.embedding_port import EmbeddingPort
from ..ports.search_port import SearchIndexPort

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONTEXT_SEPARATOR = "\n"


def _single_line(text: str) -> str:
    """Fold line breaks so each citation stays one context line."""
    return " ".join(text.splitlines())


class RagContextService(Generic[T]):
    """Combines prompt embeddings with hybrid search into context and citations."""

    def __init__(
        self,
        embedding: EmbeddingPort,
        search_index: SearchIndexPort[T],
        codec: DocumentCodec[T],
    ) -> None:
        """Initialize the service.

        Args:
            embedding: Backend that embeds the prompt.
            search_index: Index queried with the prompt and its embedding.
            codec: Codec of the indexed document type; supplies display text.
        """
        self.embedding = embedding
        self.search_index = search_index
        self.codec = codec

    def get_context_with_citations(self, prompt: str, top_k: int = 3) -> RagContextResult[T]:
        """Retrieve context and citations for a prompt.

        The steps run strictly in order and the first failure propagates, so
        the index is never queried when the embedding call fails. Line breaks
        inside a document's text are folded into spaces, so line *i* of the
        context always belongs to citation *i*.

        Args:
            prompt: The user prompt to retrieve context for.
            top_k: Maximum number of documents to retrieve.

        Returns:
            RagContextResult whose citations keep the index's ranking order.

        Raises:
            EmptyPromptError: If the prompt is empty or whitespace only.
        """
        if not prompt or not prompt.strip():
            raise EmptyPromptError("Prompt cannot be empty.")

        vector = self.embedding.get_embedding(prompt)
        documents = self.search_index.hybrid_search(prompt, vector, top_k)
        logger.debug("Hybrid search returned %d documents (top_k=%d)", len(documents), top_k)

        return RagContextResult(
            context=CONTEXT_SEPARATOR.join(
                _single_line(self.codec.display_text(doc)) for doc in documents
            ),
            citations=list(documents),
        )
