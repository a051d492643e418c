"""Embedding Port Interface."""

from abc import ABC, abstractmethod


class EmbeddingPort(ABC):
    """Abstract interface for text embedding backends."""

    @abstractmethod
    def get_embedding(self, text: str) -> list[float]:
        """Embed a single text into a fixed-dimension vector."""
        ...
