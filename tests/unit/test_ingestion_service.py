"""Unit tests for ProjectIngestionService."""

from unittest.mock import MagicMock

import pytest

from ragchat.core.domain.exceptions import EmbeddingBackendError, IndexingFailedError
from ragchat.core.services.ingestion_service import (
    EmbeddingFailurePolicy,
    ProjectIngestionService,
)

pytestmark = pytest.mark.unit


def failing_on(text_fragment):
    """Embedding side effect that fails for texts containing a fragment."""

    def _embed(text):
        if text_fragment in text:
            raise EmbeddingBackendError("HTTP 429")
        return [float(len(text))]

    return _embed


@pytest.fixture
def embedding():
    mock = MagicMock()
    mock.get_embedding.side_effect = failing_on("Node.js")
    return mock


@pytest.fixture
def search_index():
    mock = MagicMock()
    mock.upload.side_effect = lambda batch: len(batch)
    return mock


class TestEmbedAndUpload:
    def test_counts_success_and_failure(self, embedding, search_index, sample_projects):
        service = ProjectIngestionService(embedding, search_index)

        result = service.embed_and_upload(sample_projects)

        assert (result.success, result.fail) == (2, 1)
        assert result.failed_ids == ["p2"]

    def test_sets_vectors_in_place(self, embedding, search_index, sample_projects):
        ProjectIngestionService(embedding, search_index).embed_and_upload(sample_projects)

        assert sample_projects[0].content_vector is not None
        assert sample_projects[1].content_vector is None
        assert sample_projects[2].content_vector is not None

    def test_upload_all_includes_failed(self, embedding, search_index, sample_projects):
        result = ProjectIngestionService(embedding, search_index).embed_and_upload(
            sample_projects
        )

        batch = search_index.upload.call_args.args[0]
        assert [doc.id for doc in batch] == ["p1", "p2", "p3"]
        assert result.uploaded == 3

    def test_skip_failed_leaves_failed_out(self, embedding, search_index, sample_projects):
        service = ProjectIngestionService(
            embedding, search_index, policy=EmbeddingFailurePolicy.SKIP_FAILED
        )

        result = service.embed_and_upload(sample_projects)

        batch = search_index.upload.call_args.args[0]
        assert [doc.id for doc in batch] == ["p1", "p3"]
        assert result.uploaded == 2

    def test_upload_called_once(self, embedding, search_index, sample_projects):
        ProjectIngestionService(embedding, search_index).embed_and_upload(sample_projects)

        search_index.upload.assert_called_once()

    def test_missing_raw_text_is_embedded_as_empty(self, search_index, sample_projects):
        embedding = MagicMock()
        embedding.get_embedding.return_value = [0.0]
        sample_projects[0].raw_text = None

        ProjectIngestionService(embedding, search_index).embed_and_upload(sample_projects[:1])

        embedding.get_embedding.assert_called_once_with("")

    def test_upload_failure_propagates(self, embedding, search_index, sample_projects):
        search_index.upload.side_effect = IndexingFailedError("Status: 403")

        with pytest.raises(IndexingFailedError):
            ProjectIngestionService(embedding, search_index).embed_and_upload(sample_projects)

    def test_progress_callback(self, embedding, search_index, sample_projects):
        calls = []

        ProjectIngestionService(embedding, search_index).embed_and_upload(
            sample_projects, on_progress=lambda pos, total, doc, ok: calls.append((pos, total, doc.id, ok))
        )

        assert calls == [(1, 3, "p1", True), (2, 3, "p2", False), (3, 3, "p3", True)]

    def test_concurrent_workers_keep_order(self, embedding, search_index, sample_projects):
        service = ProjectIngestionService(embedding, search_index, max_workers=4)

        result = service.embed_and_upload(sample_projects)

        batch = search_index.upload.call_args.args[0]
        assert [doc.id for doc in batch] == ["p1", "p2", "p3"]
        assert (result.success, result.fail) == (2, 1)
        assert embedding.get_embedding.call_count == 3

    def test_empty_input(self, embedding, search_index):
        result = ProjectIngestionService(embedding, search_index).embed_and_upload([])

        assert (result.success, result.fail, result.uploaded) == (0, 0, 0)
        search_index.upload.assert_called_once_with([])

    def test_worker_count_is_at_least_one(self, embedding, search_index):
        assert ProjectIngestionService(embedding, search_index, max_workers=0).max_workers == 1
