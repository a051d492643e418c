"""CLI interface for the RAG chat service."""

import json
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ....common.exception_handler import format_exception_json
from ....composition.container import (
    build_chat_service,
    build_ingestion_service,
    build_rag_chat_service,
)
from ....config.local_settings import load_local_settings
from ....config.logging import setup_logging
from ....config.settings import Settings
from ....core.domain import ProjectDocument
from ....core.domain.exceptions import ConfigurationError, MalformedResponseError
from ....core.services.document_codecs import ProjectDocumentCodec
from ....core.services.ingestion_service import EmbeddingFailurePolicy
from .progress import IngestionProgress

app = typer.Typer(
    name="ragchat",
    help="RAG chat over a portfolio of project documents",
    add_completion=False,
)

console = Console(force_terminal=True, legacy_windows=False)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"


def handle_cli_error(exc: Exception) -> None:
    """Handle and display errors in CLI with structured format.

    In debug mode, shows full JSON error details.
    In normal mode, shows a user-friendly message with error code.

    Args:
        exc: The exception to handle.
    """
    error_data = format_exception_json(exc, include_trace=DEBUG_MODE)

    if DEBUG_MODE:
        console.print(
            Panel(
                json.dumps(error_data, indent=2, default=str),
                title="[bold red]Error Details[/]",
                border_style="red",
            )
        )
    else:
        error_type = error_data["error"]["type"]
        error_msg = error_data["error"]["message"]
        error_code = error_data["error"].get("code", "UNKNOWN")

        console.print(f"\n[red]Error [{error_code}]:[/] {error_msg}")
        console.print(f"[dim]Type: {error_type}[/]")
        console.print("[dim]Set DEBUG=true for full details[/]")


def load_projects(path: Path) -> list[ProjectDocument]:
    """Read a JSON array of project documents.

    Raises:
        MalformedResponseError: If the file is not a JSON array of documents.
    """
    raw = json.loads(path.read_text(encoding="utf-8-sig"))
    if not isinstance(raw, list):
        raise MalformedResponseError(f"{path} must contain a JSON array of projects.")
    codec = ProjectDocumentCodec()
    return [codec.from_payload(item) for item in raw]


@app.command()
def upload(
    file: Path = typer.Option(Path("projects.json"), help="JSON array of project documents"),
    settings_file: Path = typer.Option(
        Path("local.settings.json"), "--settings", help="Settings file exported into the environment"
    ),
    skip_failed: bool = typer.Option(
        False, help="Leave documents whose embedding failed out of the upload"
    ),
    workers: int = typer.Option(1, min=1, help="Concurrent embedding calls"),
) -> None:
    """Embed project documents and upload them to the search index."""
    try:
        if load_local_settings(settings_file):
            console.print(f"Environment variables loaded from {settings_file}")
        else:
            console.print(f"[yellow]Warning: {settings_file} not found or empty[/]")
    except ConfigurationError as exc:
        handle_cli_error(exc)

    config = Settings()
    setup_logging(config.log_level, config.log_file, config.log_json)

    console.print(f"Loading projects from {file}...")
    if not file.exists():
        console.print(f"[red]Error:[/] {file} not found")
        raise typer.Exit(1)

    try:
        projects = load_projects(file)
    except (ValueError, MalformedResponseError) as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)
    console.print(f"Loaded {len(projects)} projects")

    policy = EmbeddingFailurePolicy.SKIP_FAILED if skip_failed else EmbeddingFailurePolicy.UPLOAD_ALL
    try:
        service = build_ingestion_service(config, policy=policy, max_workers=workers)
    except ConfigurationError as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print("Starting embedding and upload process...")
    progress = IngestionProgress(console, len(projects))
    try:
        with progress:
            result = service.embed_and_upload(projects, on_progress=progress)
    except Exception as exc:
        console.print(
            f"Process completed. Successfully processed: {progress.embedded}, "
            f"Failed: {progress.failed}"
        )
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print(f"Uploaded {result.uploaded} documents to the search index")
    console.print(
        f"Process completed. Successfully processed: {result.success}, Failed: {result.fail}"
    )


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question about the indexed projects"),
    top_k: int = typer.Option(3, "--top-k", min=1, max=20, help="Documents to retrieve"),
    no_rag: bool = typer.Option(False, "--no-rag", help="Skip retrieval, plain chat only"),
) -> None:
    """Ask a single question and get an answer."""
    config = Settings()
    try:
        service = build_chat_service(config) if no_rag else build_rag_chat_service(config)
        with console.status("[bold green]Thinking...[/]"):
            if no_rag:
                answer, citations = service.get_chat_completion(question), []
            else:
                result = service.get_rag_chat_completion_with_citations(question, top_k=top_k)
                answer, citations = result.answer, result.citations
    except Exception as exc:
        handle_cli_error(exc)
        raise typer.Exit(1)

    console.print(Markdown(answer or "_No answer returned._"))

    if citations:
        table = Table(title="Citations", show_lines=False)
        table.add_column("#", style="dim")
        table.add_column("Id")
        table.add_column("Title")
        table.add_column("Tech stack", style="dim")
        for position, doc in enumerate(citations, start=1):
            table.add_row(str(position), doc.id or "", doc.title or "", ", ".join(doc.tech_stack or []))
        console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("ragchat.adapters.inbound.api.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
