"""Chat Model Port Interface."""

from abc import ABC, abstractmethod


class ChatModelPort(ABC):
    """Abstract interface for chat-completion backends."""

    @abstractmethod
    def complete(self, prompt: str, deployment: str | None = None) -> str | None:
        """Send a rendered prompt and return the model's text, if any."""
        ...
