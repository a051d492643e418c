"""FastAPI application for the RAG chat service."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ....common.exception_handler import get_http_status_code, get_public_message, log_exception
from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain.exceptions import RagChatError
from .routers import chat, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup and log shutdown."""
    setup_logging(settings.log_level, settings.log_file, settings.log_json)
    logger.info("RAG Chat Bot API starting up...")
    logger.info("Debug mode: %s", "ENABLED" if settings.debug else "DISABLED")
    yield
    logger.info("RAG Chat Bot API shutting down...")


app = FastAPI(
    title="RAG Chat Bot API",
    description=(
        "Chat over a portfolio of project documents. Answers can be grounded on "
        "documents retrieved by hybrid search, returned as citations."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # Local dev
        "http://localhost:5173",  # Vite dev server
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(chat.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(RagChatError)
async def rag_chat_error_handler(request: Request, exc: RagChatError) -> JSONResponse:
    """Handle RagChatError raised outside the routes' own error handling."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content={"error": get_public_message(exc)},
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject bodies that are not a valid prompt request."""
    logger.warning("Invalid request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body."})


__all__ = ["app"]
