"""Service providers for the API routes."""

from ....composition.container import get_chat_service, get_rag_chat_service

__all__ = ["get_chat_service", "get_rag_chat_service"]
