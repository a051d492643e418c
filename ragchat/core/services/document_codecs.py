"""Codecs for the document shapes the service knows about."""

from dataclasses import asdict
from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..domain import ChatRequest, ProjectDocument
from ..domain.exceptions import MalformedResponseError
from ..ports.document_codec import DocumentCodec

T = TypeVar("T")


class DataclassCodec(DocumentCodec[T]):
    """Codec for dataclass documents whose fields mirror the index fields.

    Decoding validates the payload with pydantic; unknown keys such as
    ``@search.score`` are ignored.
    """

    def __init__(self, document_type: type[T]) -> None:
        self.document_type = document_type
        self._adapter = TypeAdapter(document_type)

    def from_payload(self, payload: Any) -> T:
        try:
            return self._adapter.validate_python(payload)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                f"Search result cannot be decoded into {self.document_type.__name__}",
                cause=e,
                context={"errors": e.error_count()},
            ) from e

    def to_payload(self, document: T) -> dict[str, Any]:
        return {key: value for key, value in asdict(document).items() if value is not None}


class ProjectDocumentCodec(DataclassCodec[ProjectDocument]):
    """Project documents contribute their raw text to the context."""

    def __init__(self) -> None:
        super().__init__(ProjectDocument)

    def display_text(self, document: ProjectDocument) -> str:
        return document.raw_text or ""


class ChatRequestCodec(DataclassCodec[ChatRequest]):
    """Lets ChatRequest stand in as the document type of a prompt-only pipeline."""

    def __init__(self) -> None:
        super().__init__(ChatRequest)

    def display_text(self, document: ChatRequest) -> str:
        return document.prompt or ""
