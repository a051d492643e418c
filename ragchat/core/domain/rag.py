"""Result models for retrieval-augmented generation."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class RagContextResult(Generic[T]):
    """Context assembled from retrieved documents plus its sources.

    ``citations`` keeps the order the search service returned, and
    ``context`` holds one newline-separated fragment per citation in that
    same order.

    Attributes:
        context: Combined display text of all citations.
        citations: Documents that produced the context.
    """

    context: str = ""
    citations: list[T] = field(default_factory=list)


@dataclass
class RagChatAnswer(Generic[T]):
    """Answer from the chat model together with the documents it was grounded on."""

    answer: str
    citations: list[T] = field(default_factory=list)


@dataclass
class IngestionResult:
    """Outcome of an embed-and-upload batch.

    Attributes:
        success: Documents embedded successfully.
        fail: Documents whose embedding failed.
        uploaded: Documents sent to the index.
        failed_ids: Ids of the documents counted in ``fail``.
    """

    success: int = 0
    fail: int = 0
    uploaded: int = 0
    failed_ids: list[str | None] = field(default_factory=list)
