from docintel.database.repositories.document_repository import DocumentRepository
from docintel.documents.exceptions import FileTooLargeError
from docintel.documents.models import DocumentRecord, DocumentStatus
from docintel.extraction.exceptions import UnsupportedMediaTypeError
from docintel.logging.logger import Log
from docintel.processor.exceptions import DocumentNotFoundError
from docintel.storage.base import BaseStorage
from docintel.worker.models import ProcessingJob
from docintel.worker.pool import WorkerPool

ALLOWED_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/msword",
        "text/plain",
        "image/jpeg",
        "image/png",
        "image/gif",
    }
)


class DocumentService:
    """Synchronous request path: validate, store, record, enqueue.

    Processing is deferred to the worker pool; every method returns the record
    as it is at call time.
    """

    def __init__(
        self,
        doc_repo: DocumentRepository,
        storage: BaseStorage,
        pool: WorkerPool,
        max_upload_bytes: int = 10 * 1024 * 1024,
    ) -> None:
        self._doc_repo = doc_repo
        self._storage = storage
        self._pool = pool
        self._max_upload_bytes = max_upload_bytes

    def upload(self, filename: str, media_type: str, data: bytes) -> DocumentRecord:
        """Store a new document and queue it for processing.

        Raises:
            UnsupportedMediaTypeError: if the media type is not accepted.
            FileTooLargeError: if the file exceeds the size limit.
        """
        self._validate(media_type, len(data))
        key = self._storage.put(data, media_type, filename)
        document = self._doc_repo.create(
            DocumentRecord(
                id="",
                filename=key.rsplit("/", 1)[-1],
                original_name=filename,
                mime_type=media_type,
                size=len(data),
                storage_key=key,
                status=DocumentStatus.UPLOADED,
            )
        )
        Log.info(f"Uploaded document {document.id} ({filename}, {len(data)} bytes)")
        self._pool.submit(ProcessingJob(document_id=document.id))
        return document

    def get(self, document_id: str) -> DocumentRecord:
        document = self._doc_repo.find_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document with ID {document_id} not found")
        return document

    def list_all(self) -> list[DocumentRecord]:
        return self._doc_repo.list_all()

    def delete(self, document_id: str) -> None:
        """Remove the stored bytes, then the record."""
        document = self.get(document_id)
        self._storage.delete(document.storage_key)
        self._doc_repo.delete(document_id)
        Log.info(f"Deleted document {document_id}")

    def reprocess(self, document_id: str, custom_prompt: str | None = None) -> DocumentRecord:
        document = self.get(document_id)
        self._pool.submit(ProcessingJob(document_id=document_id, custom_prompt=custom_prompt))
        Log.info(f"Reprocessing requested for document {document_id}")
        return document

    def _validate(self, media_type: str, size: int) -> None:
        if media_type not in ALLOWED_MIME_TYPES:
            raise UnsupportedMediaTypeError(f"Unsupported file type: {media_type}")
        if size > self._max_upload_bytes:
            raise FileTooLargeError(
                f"File size exceeds maximum limit of {self._max_upload_bytes // (1024 * 1024)}MB"
            )
