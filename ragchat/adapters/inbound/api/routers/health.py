"""Health check endpoint."""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

HEALTH_MESSAGE = "The RAG Chat Bot API is running!"


@router.api_route("/health", methods=["GET", "POST"], response_class=PlainTextResponse)
def health_check() -> str:
    """Liveness check; touches no backend."""
    logger.info("Health check endpoint processed a request.")
    return HEALTH_MESSAGE
