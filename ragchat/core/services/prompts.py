"""Prompt templates for the chat service."""

from dataclasses import dataclass

CHAT_WITH_CONTEXT_PROMPT = "{context}\nUser: {user_input}\nAssistant:"


@dataclass(frozen=True)
class PromptTemplate:
    """A named prompt with ``{placeholder}`` variables."""

    name: str
    template: str

    def render(self, **variables: str) -> str:
        """Fill the template; values are inserted verbatim, braces included."""
        return self.template.format(**variables)


CHAT_WITH_CONTEXT = PromptTemplate(name="ChatWithContext", template=CHAT_WITH_CONTEXT_PROMPT)
