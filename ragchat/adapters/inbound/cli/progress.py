"""Progress display for the upload command."""

import threading

from rich.console import Console
from rich.live import Live
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from ....core.domain import ProjectDocument


class IngestionProgress:
    """Per-document progress for embedding runs.

    Instances are used as the ``on_progress`` callback of
    ``ProjectIngestionService.embed_and_upload``: every call prints one line
    for the document and advances the bar. Calls may arrive from several
    worker threads at once.
    """

    def __init__(self, console: Console, total: int):
        self.console = console
        self.total = total
        self.embedded = 0
        self.failed = 0
        self._lock = threading.Lock()
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self._task_id = self._progress.add_task(description="Embedding...", total=total)
        self._live = Live(self._progress, console=console, refresh_per_second=4)

    def __enter__(self) -> "IngestionProgress":
        self._live.start()
        return self

    def __exit__(self, *args) -> None:
        self._live.stop()

    def __call__(self, position: int, total: int, document: ProjectDocument, ok: bool) -> None:
        label = f"{document.id} - {document.title}"
        display_name = label[:40] + "..." if len(label) > 40 else label
        with self._lock:
            if ok:
                self.embedded += 1
                self.console.print(f"│  [green]✓[/] Processing project {position}/{total}: {label}")
            else:
                self.failed += 1
                self.console.print(f"│  [red]✗ Error embedding project {document.id}[/]")
            self._progress.update(
                self._task_id, advance=1, description=f"Embedding: {display_name}"
            )
