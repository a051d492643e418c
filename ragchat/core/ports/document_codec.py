"""Document Codec Port Interface."""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class DocumentCodec(ABC, Generic[T]):
    """Per-document-type capabilities the pipeline needs.

    One codec exists for each document shape. It turns index payloads into
    documents and back, and picks the text a document contributes to the
    chat context.
    """

    @abstractmethod
    def from_payload(self, payload: Any) -> T:
        """Decode one search hit into a document."""
        ...

    @abstractmethod
    def to_payload(self, document: T) -> dict[str, Any]:
        """Encode a document for upload."""
        ...

    def display_text(self, document: T) -> str:
        """Text a document contributes to the context."""
        return "" if document is None else str(document)
