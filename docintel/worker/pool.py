import threading
from collections import Counter
from concurrent.futures import Future, ThreadPoolExecutor, wait

from docintel.logging.logger import Log
from docintel.worker.job_runner import JobRunner
from docintel.worker.models import ProcessingJob


class WorkerPool:
    """Fixed-size thread pool running processing jobs.

    ``submit`` returns immediately; callers observe progress only through the
    document status. Documents with a job queued or running are reported by
    ``active_document_ids`` so the poll loop does not claim them again.
    """

    def __init__(self, job_runner: JobRunner, size: int = 4) -> None:
        if size < 1:
            raise ValueError("WorkerPool size must be at least 1")
        self._job_runner = job_runner
        self._executor = ThreadPoolExecutor(max_workers=size, thread_name_prefix="docintel-worker")
        self._futures: set[Future[None]] = set()
        self._active: Counter[str] = Counter()
        self._errors: list[BaseException] = []
        self._closed = False
        self._lock = threading.Lock()
        Log.info(f"Worker pool ready with {size} threads")

    def submit(self, job: ProcessingJob) -> None:
        with self._lock:
            if self._closed:
                raise RuntimeError("WorkerPool is shut down")
            self._reap()
            self._active[job.document_id] += 1
            self._futures.add(self._executor.submit(self._run, job))
        Log.debug(f"Queued job for document {job.document_id}")

    def active_document_ids(self) -> frozenset[str]:
        """Ids of documents with a job queued or running."""
        with self._lock:
            return frozenset(self._active)

    def join(self) -> list[BaseException]:
        """Block until every submitted job has run.

        Returns the exceptions that escaped jobs since the previous call.
        """
        while True:
            with self._lock:
                self._reap()
                pending = set(self._futures)
            if not pending:
                break
            wait(pending)
        with self._lock:
            errors, self._errors = self._errors, []
        return errors

    def shutdown(self) -> None:
        """Finish queued jobs, then stop all threads."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=True)
        Log.info("Worker pool stopped")

    def _run(self, job: ProcessingJob) -> None:
        try:
            self._job_runner.run(job)
        finally:
            with self._lock:
                self._active[job.document_id] -= 1
                if self._active[job.document_id] <= 0:
                    del self._active[job.document_id]

    def _reap(self) -> None:
        # Caller holds self._lock.
        for future in [f for f in self._futures if f.done()]:
            self._futures.discard(future)
            exc = future.exception()
            if exc is not None:
                Log.error(f"Job escaped the runner: {exc!r}")
                self._errors.append(exc)
