"""Document models indexed in and retrieved from the search service."""

from dataclasses import dataclass


@dataclass
class ProjectDocument:
    """A portfolio project as stored in the search index.

    Attribute names match the index field names, so a search hit can be
    decoded straight into this class and a document can be uploaded as is.

    Attributes:
        id: Unique key of the document in the index.
        title: Project title.
        description: Short project description.
        tech_stack: Technologies used in the project.
        date_range: Free-form date range, e.g. "2020-2021".
        metadata: Free-form extra information.
        raw_text: Full text content; this is what feeds the chat context.
        content_vector: Embedding of ``raw_text``. Documents without a vector
            are not reachable through vector similarity.
    """

    id: str | None = None
    title: str | None = None
    description: str | None = None
    tech_stack: list[str] | None = None
    date_range: str | None = None
    metadata: str | None = None
    raw_text: str | None = None
    content_vector: list[float] | None = None


@dataclass
class ChatRequest:
    """A bare prompt wrapper used by the chat path that has no index."""

    prompt: str | None = None
