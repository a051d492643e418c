"""Domain models for the RAG chat service.

- document: ProjectDocument and ChatRequest
- rag: RagContextResult, RagChatAnswer and IngestionResult
- models: AvailableModel and the deployment lookup table

All models are re-exported here:

    from ragchat.core.domain import ProjectDocument, RagContextResult
"""

from .document import ChatRequest, ProjectDocument
from .models import DEFAULT_DEPLOYMENT, MODEL_DEPLOYMENTS, AvailableModel, get_deployment_name
from .rag import IngestionResult, RagChatAnswer, RagContextResult

__all__ = [
    # Document models
    "ProjectDocument",
    "ChatRequest",
    # RAG models
    "RagContextResult",
    "RagChatAnswer",
    "IngestionResult",
    # Model lookup
    "AvailableModel",
    "MODEL_DEPLOYMENTS",
    "DEFAULT_DEPLOYMENT",
    "get_deployment_name",
]
