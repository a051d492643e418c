"""Unit tests for the upload progress display."""

import io
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from ragchat.adapters.inbound.cli.progress import IngestionProgress
from ragchat.core.domain import ProjectDocument
from ragchat.core.services.ingestion_service import ProjectIngestionService

pytestmark = pytest.mark.unit


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


def make_documents(count):
    return [
        ProjectDocument(id=f"p{i}", title=f"Project {i}", raw_text=f"text {i}")
        for i in range(count)
    ]


class TestIngestionProgress:
    def test_counts_and_lines(self, console):
        documents = make_documents(2)
        progress = IngestionProgress(console, total=2)

        progress(1, 2, documents[0], True)
        progress(2, 2, documents[1], False)

        output = console.file.getvalue()
        assert (progress.embedded, progress.failed) == (1, 1)
        assert "Processing project 1/2: p0 - Project 0" in output
        assert "Error embedding project p1" in output

    def test_concurrent_calls_are_all_counted(self, console):
        documents = make_documents(400)
        progress = IngestionProgress(console, total=len(documents))

        def report(position):
            progress(position + 1, len(documents), documents[position], position % 4 != 0)

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(report, range(len(documents))))

        assert progress.embedded == 300
        assert progress.failed == 100
        task = progress._progress.tasks[0]
        assert task.completed == len(documents)

    def test_as_callback_of_concurrent_ingestion(self, console):
        documents = make_documents(50)
        embedding = MagicMock()
        embedding.get_embedding.return_value = [0.1]
        search_index = MagicMock()
        search_index.upload.side_effect = len
        service = ProjectIngestionService(embedding, search_index, max_workers=8)
        progress = IngestionProgress(console, total=len(documents))

        with progress:
            result = service.embed_and_upload(documents, on_progress=progress)

        assert progress.embedded == result.success == 50
        assert progress.failed == 0
