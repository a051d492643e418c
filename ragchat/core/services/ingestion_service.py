"""Embedding and upload of project documents into the search index."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

from ..domain import IngestionResult, ProjectDocument
from ..ports.embedding_port import EmbeddingPort
from ..ports.search_port import SearchIndexPort

logger = logging.getLogger(__name__)

# Called after each document with (position, total, document, embedded_ok)
ProgressCallback = Callable[[int, int, ProjectDocument, bool], None]


class EmbeddingFailurePolicy(Enum):
    """What happens to documents whose embedding failed.

    Attributes:
        UPLOAD_ALL: Upload every loaded document; failed ones keep whatever
            vector they already had (usually none).
        SKIP_FAILED: Leave failed documents out of the upload batch.
    """

    UPLOAD_ALL = "upload_all"
    SKIP_FAILED = "skip_failed"


class ProjectIngestionService:
    """Embeds project documents and uploads them as one batch."""

    def __init__(
        self,
        embedding: EmbeddingPort,
        search_index: SearchIndexPort[ProjectDocument],
        policy: EmbeddingFailurePolicy = EmbeddingFailurePolicy.UPLOAD_ALL,
        max_workers: int = 1,
    ) -> None:
        """Initialize the ingestion service.

        Args:
            embedding: Backend that embeds each document's raw text.
            search_index: Index receiving the upload batch.
            policy: Handling of documents whose embedding failed.
            max_workers: Concurrent embedding calls; 1 embeds sequentially.
        """
        self.embedding = embedding
        self.search_index = search_index
        self.policy = policy
        self.max_workers = max(1, max_workers)

    def _embed(self, document: ProjectDocument) -> bool:
        try:
            document.content_vector = self.embedding.get_embedding(document.raw_text or "")
            return True
        except Exception as e:
            logger.warning("Error embedding project %s: %s", document.id, e)
            return False

    def embed_and_upload(
        self,
        documents: list[ProjectDocument],
        on_progress: ProgressCallback | None = None,
    ) -> IngestionResult:
        """Embed every document, then upload the batch.

        A failed embedding is counted and does not stop the batch. The upload
        itself is all-or-nothing and its failure propagates.

        Args:
            documents: Documents to embed; their ``content_vector`` is set in place.
            on_progress: Optional callback invoked after each document.

        Returns:
            IngestionResult with success/fail counts and the uploaded count.

        Raises:
            IndexingFailedError: If the index rejects the upload batch.
        """
        total = len(documents)

        def embed_one(position: int) -> bool:
            document = documents[position]
            ok = self._embed(document)
            if on_progress:
                on_progress(position + 1, total, document, ok)
            return ok

        if self.max_workers > 1 and total > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                outcomes = list(pool.map(embed_one, range(total)))
        else:
            outcomes = [embed_one(position) for position in range(total)]

        result = IngestionResult(
            success=sum(outcomes),
            fail=total - sum(outcomes),
            failed_ids=[doc.id for doc, ok in zip(documents, outcomes) if not ok],
        )

        if self.policy is EmbeddingFailurePolicy.SKIP_FAILED:
            batch = [doc for doc, ok in zip(documents, outcomes) if ok]
        else:
            batch = list(documents)

        logger.info(
            "Uploading %d documents (embedded: %d, failed: %d, policy: %s)",
            len(batch),
            result.success,
            result.fail,
            self.policy.value,
        )
        result.uploaded = self.search_index.upload(batch)
        return result
