import time

from docintel.config.settings import Settings
from docintel.database.repositories.document_repository import DocumentRepository
from docintel.logging.logger import Log
from docintel.worker.models import ProcessingJob
from docintel.worker.pool import WorkerPool


class Worker:
    """Poll loop: claim stale uploads and abandoned runs -> submit to the pool -> sleep."""

    def __init__(
        self,
        doc_repo: DocumentRepository,
        pool: WorkerPool,
        settings: Settings,
    ) -> None:
        self._doc_repo = doc_repo
        self._pool = pool
        self._settings = settings

    def run(self, max_iterations: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_iterations is set, stop after that many polls (for testing).
        """
        Log.info("Worker started, polling for uploaded documents")
        iterations = 0
        try:
            while max_iterations is None or iterations < max_iterations:
                iterations += 1
                document_ids = self._try_claim_documents()
                for document_id in document_ids:
                    self._pool.submit(ProcessingJob(document_id=document_id))
                if not document_ids:
                    Log.debug("No documents waiting, sleeping")
                    time.sleep(self._settings.job_poll_interval_seconds)
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")

    def _try_claim_documents(self) -> list[str]:
        """Claim waiting documents not already queued here. Gracefully handle DB errors."""
        try:
            return self._doc_repo.claim_uploaded(
                self._settings.claim_batch_size,
                self._settings.stale_upload_seconds,
                self._settings.stale_processing_seconds,
                exclude_ids=self._pool.active_document_ids(),
            )
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return []
