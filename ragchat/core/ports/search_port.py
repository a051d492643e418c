"""Search Index Port Interface."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class SearchIndexPort(ABC, Generic[T]):
    """Abstract interface for a document index with hybrid search."""

    @abstractmethod
    def upload(self, documents: Iterable[T | None]) -> int:
        """Upsert a batch of documents, skipping None entries.

        Returns:
            Number of documents sent to the index.
        """
        ...

    @abstractmethod
    def hybrid_search(self, query: str, vector: list[float], top_k: int = 3) -> list[T]:
        """Run one combined lexical + vector query.

        Returns:
            At most ``top_k`` documents in the index's ranking order.
        """
        ...
