from docintel.logging.logger import Log, Timer
from docintel.processor.processor import Processor
from docintel.worker.locks import DocumentLocks
from docintel.worker.models import ProcessingJob


class JobRunner:
    """Run one job under its document lock and catch exceptions."""

    def __init__(self, processor: Processor, locks: DocumentLocks | None = None) -> None:
        self._processor = processor
        self._locks = locks or DocumentLocks()

    def run(self, job: ProcessingJob) -> None:
        """Execute a single job with error handling. No retry."""
        with Log.bind_document(job.document_id), Timer() as timer:
            Log.info("Running job")
            try:
                with self._locks.hold(job.document_id):
                    Log.debug("Document lock acquired", waited_ms=timer.current_ms())
                    self._processor.process(job.document_id, job.custom_prompt)
            except Exception as exc:
                Log.exception(f"Job crashed: {exc}")
                return
        Log.info("Job finished", document_id=job.document_id, elapsed_ms=timer.elapsed_ms)
