"""Composition root wiring adapters to the application services.

The ``build_*`` functions take explicit settings; the ``get_*`` functions
are process-wide singletons built from the global settings.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from ..adapters.outbound.embedding.azure_openai_embedding import AzureOpenAIEmbeddingAdapter
from ..adapters.outbound.llm.azure_openai_chat import AzureOpenAIChatAdapter
from ..adapters.outbound.search.azure_search_adapter import AzureSearchAdapter
from ..config.settings import Settings, settings
from ..core.domain import ChatRequest, ProjectDocument
from ..core.services.chat_service import ChatService
from ..core.services.document_codecs import ProjectDocumentCodec
from ..core.services.ingestion_service import EmbeddingFailurePolicy, ProjectIngestionService
from ..core.services.rag_context_service import RagContextService

logger = logging.getLogger(__name__)


def build_embedding(config: Settings) -> AzureOpenAIEmbeddingAdapter:
    return AzureOpenAIEmbeddingAdapter(config.embedding_config())


def build_search_index(config: Settings) -> AzureSearchAdapter[ProjectDocument]:
    return AzureSearchAdapter(config.search_config(), ProjectDocumentCodec())


def build_chat_model(config: Settings) -> AzureOpenAIChatAdapter:
    return AzureOpenAIChatAdapter(config.chat_config())


def build_rag_chat_service(config: Settings) -> ChatService[ProjectDocument]:
    rag_context = RagContextService(
        build_embedding(config), build_search_index(config), ProjectDocumentCodec()
    )
    return ChatService(
        build_chat_model(config),
        rag_context=rag_context,
        default_deployment=config.openai_chat_deployment,
    )


def build_chat_service(config: Settings) -> ChatService[ChatRequest]:
    return ChatService(build_chat_model(config), default_deployment=config.openai_chat_deployment)


def build_ingestion_service(
    config: Settings,
    policy: EmbeddingFailurePolicy = EmbeddingFailurePolicy.UPLOAD_ALL,
    max_workers: int = 1,
) -> ProjectIngestionService:
    return ProjectIngestionService(
        build_embedding(config),
        build_search_index(config),
        policy=policy,
        max_workers=max_workers,
    )


@lru_cache
def get_rag_chat_service() -> ChatService[ProjectDocument]:
    logger.info("Initializing RAG ChatService...")
    return build_rag_chat_service(settings)


@lru_cache
def get_chat_service() -> ChatService[ChatRequest]:
    logger.info("Initializing ChatService...")
    return build_chat_service(settings)
