"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, Field


class PromptRequest(BaseModel):
    """Request body shared by the chat and RAG chat endpoints.

    ``prompt`` is optional at the schema level so an empty or missing prompt
    is answered with the endpoint's own 400 error instead of a schema error.
    """

    prompt: str | None = Field(
        None,
        description="The user prompt to send to the chat model",
        json_schema_extra={"example": "What backend frameworks were used?"},
    )
    top_k: int | None = Field(
        None,
        ge=1,
        le=20,
        description="Number of documents to retrieve (RAG chat only)",
    )


class ChatResponse(BaseModel):
    """Response model for plain chat."""

    response: str = Field(..., description="The AI-generated answer")


class CitationInfo(BaseModel):
    """A project document the answer was grounded on."""

    id: str | None = Field(None, description="Document key in the index")
    title: str | None = Field(None, description="Project title")
    description: str | None = Field(None, description="Project description")
    tech_stack: list[str] | None = Field(None, description="Technologies used")
    date_range: str | None = Field(None, description="Project date range")
    metadata: str | None = Field(None, description="Additional metadata")


class RagChatResponse(BaseModel):
    """Response model for RAG chat."""

    response: str = Field(..., description="The AI-generated answer")
    citations: list[CitationInfo] = Field(
        default_factory=list,
        description="Documents used to ground the answer, in retrieval order",
    )


class ErrorResponse(BaseModel):
    """Response model for errors."""

    error: str = Field(..., description="Client-safe error message")
