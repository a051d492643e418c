"""Chat endpoints: plain chat and retrieval-augmented chat."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .....common.exception_handler import (
    get_http_status_code,
    get_public_message,
    log_exception,
)
from .....config.settings import settings
from .....core.domain import AvailableModel
from ..deps import get_chat_service, get_rag_chat_service
from ..models import ChatResponse, CitationInfo, ErrorResponse, PromptRequest, RagChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

EMPTY_PROMPT_MESSAGE = "Prompt cannot be empty."
CHAT_MODEL = AvailableModel.GPT_41

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Empty prompt"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}


def _empty_prompt(prompt: str | None) -> bool:
    return not prompt or not prompt.strip()


def _error_response(exc: Exception, endpoint: str) -> JSONResponse:
    log_exception(exc, log=logger, extra_context={"endpoint": endpoint})
    return JSONResponse(
        status_code=get_http_status_code(exc),
        content={"error": get_public_message(exc)},
    )


@router.post("/chat", response_model=ChatResponse, responses=ERROR_RESPONSES)
def chat(request: PromptRequest):
    """Answer a prompt with the chat model, without retrieval.

    Args:
        request: Body carrying the prompt.

    Returns:
        ChatResponse with the model's answer.
    """
    logger.info("Chat request received.")

    if _empty_prompt(request.prompt):
        logger.warning("Empty prompt received in chat")
        return JSONResponse(status_code=400, content={"error": EMPTY_PROMPT_MESSAGE})

    try:
        logger.info("Requesting chat completion with model: %s", CHAT_MODEL.value)
        answer = get_chat_service().get_chat_completion(request.prompt, CHAT_MODEL)
    except Exception as e:
        return _error_response(e, "/chat")

    logger.info("Chat request completed successfully")
    return ChatResponse(response=answer)


@router.post("/ragchat", response_model=RagChatResponse, responses=ERROR_RESPONSES)
def rag_chat(request: PromptRequest):
    """Answer a prompt grounded on documents retrieved from the index.

    Args:
        request: Body carrying the prompt and an optional ``top_k``.

    Returns:
        RagChatResponse with the answer and its citations.
    """
    logger.info("RAG chat request received.")

    if _empty_prompt(request.prompt):
        logger.warning("Empty prompt received in RAG chat")
        return JSONResponse(status_code=400, content={"error": EMPTY_PROMPT_MESSAGE})

    top_k = request.top_k or settings.top_k_results
    try:
        logger.info("Requesting RAG chat completion with model: %s", CHAT_MODEL.value)
        result = get_rag_chat_service().get_rag_chat_completion_with_citations(
            request.prompt, CHAT_MODEL, top_k
        )
    except Exception as e:
        return _error_response(e, "/ragchat")

    logger.info("RAG chat request completed successfully")
    return RagChatResponse(
        response=result.answer,
        citations=[
            CitationInfo(
                id=doc.id,
                title=doc.title,
                description=doc.description,
                tech_stack=doc.tech_stack,
                date_range=doc.date_range,
                metadata=doc.metadata,
            )
            for doc in result.citations
        ],
    )
