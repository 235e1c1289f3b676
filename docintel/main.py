from docintel.config.settings import Settings
from docintel.database.connection import close_pool, init_pool
from docintel.database.repositories.document_repository import DocumentRepository
from docintel.logging.logger import Log
from docintel.processor.processor import build_processor
from docintel.storage.factory import StorageFactory
from docintel.worker.job_runner import JobRunner
from docintel.worker.pool import WorkerPool
from docintel.worker.worker import Worker


def main() -> None:
    """Entry point: initialize pool -> build dependencies -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    pool: WorkerPool | None = None
    try:
        doc_repo = DocumentRepository()
        storage = StorageFactory.create(settings)
        processor = build_processor(settings, doc_repo, storage)
        pool = WorkerPool(JobRunner(processor), size=settings.worker_pool_size)
        worker = Worker(doc_repo, pool, settings)
        worker.run()
    finally:
        if pool is not None:
            pool.shutdown()
        close_pool()


if __name__ == "__main__":
    main()
