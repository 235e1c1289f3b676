import io
import threading
from collections.abc import Callable, Collection
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from docx import Document
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docintel.documents.models import DocumentCategory, DocumentRecord, DocumentStatus
from docintel.processor.exceptions import DocumentNotFoundError
from docintel.search.models import SearchFilters


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Generate a DOCX with two paragraphs and a one-row table."""
    document = Document()
    document.add_paragraph("Service agreement")
    document.add_paragraph("Payment due within 30 days")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Total"
    table.rows[0].cells[1].text = "100 EUR"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def sample_png_bytes() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (64, 32), color="white").save(buf, format="PNG")
    return buf.getvalue()


class InMemoryDocumentRepository:
    """Dict-backed stand-in for DocumentRepository with the same contract."""

    def __init__(self) -> None:
        self._records: dict[str, DocumentRecord] = {}
        self._lock = threading.Lock()
        self.status_history: dict[str, list[DocumentStatus]] = {}

    def create(self, record: DocumentRecord) -> DocumentRecord:
        now = datetime.now(timezone.utc)
        stored = replace(
            record,
            id=record.id or str(uuid4()),
            created_at=record.created_at or now,
            updated_at=now,
        )
        with self._lock:
            self._records[stored.id] = stored
        return replace(stored)

    def find_by_id(self, document_id: str) -> DocumentRecord | None:
        with self._lock:
            record = self._records.get(document_id)
        return replace(record) if record is not None else None

    def update_fields(self, document_id: str, fields: dict[str, object]) -> None:
        with self._lock:
            record = self._get(document_id)
            self._records[document_id] = replace(
                record, **fields, updated_at=datetime.now(timezone.utc)
            )
            if "status" in fields:
                self._record_status(document_id, fields["status"])  # type: ignore[arg-type]

    def update_status(
        self,
        document_id: str,
        status: DocumentStatus,
        metadata: dict[str, object] | None = None,
    ) -> None:
        with self._lock:
            record = self._get(document_id)
            self._records[document_id] = replace(
                record,
                status=status,
                metadata={**record.metadata, **(metadata or {})},
                updated_at=datetime.now(timezone.utc),
            )
            self._record_status(document_id, status)

    def list_processed(
        self, filters: SearchFilters, limit: int | None = None
    ) -> list[DocumentRecord]:
        with self._lock:
            records = [
                replace(r)
                for r in self._records.values()
                if r.status is DocumentStatus.PROCESSED
                and (filters.category is None or r.category is filters.category)
                and (filters.language is None or r.language == filters.language)
                and (
                    filters.min_confidence is None
                    or (r.confidence or 0.0) >= filters.min_confidence
                )
            ]
        records.sort(key=lambda r: r.created_at, reverse=True)  # type: ignore[arg-type, return-value]
        return records[:limit] if limit is not None else records

    def list_all(self) -> list[DocumentRecord]:
        with self._lock:
            records = [replace(r) for r in self._records.values()]
        records.sort(key=lambda r: r.created_at, reverse=True)  # type: ignore[arg-type, return-value]
        return records

    def delete(self, document_id: str) -> None:
        with self._lock:
            self._get(document_id)
            del self._records[document_id]

    def claim_uploaded(
        self,
        limit: int,
        older_than_seconds: int,
        stale_processing_seconds: int,
        exclude_ids: Collection[str] = (),
    ) -> list[str]:
        now = datetime.now(timezone.utc)
        upload_cutoff = now - timedelta(seconds=older_than_seconds)
        processing_cutoff = now - timedelta(seconds=stale_processing_seconds)
        claimed = []
        with self._lock:
            for record in self._records.values():
                if len(claimed) >= limit:
                    break
                if record.id in exclude_ids:
                    continue
                waiting = (
                    record.status is DocumentStatus.UPLOADED
                    and record.created_at < upload_cutoff  # type: ignore[operator]
                ) or (
                    record.status is DocumentStatus.PROCESSING
                    and record.updated_at < processing_cutoff  # type: ignore[operator]
                )
                if waiting:
                    claimed.append(record.id)
            for document_id in claimed:
                self._records[document_id] = replace(
                    self._records[document_id], status=DocumentStatus.PROCESSING, updated_at=now
                )
        return claimed

    def backdate(self, document_id: str, **timestamps: datetime) -> None:
        """Overwrite created_at/updated_at, bypassing the automatic refresh."""
        with self._lock:
            self._records[document_id] = replace(self._records[document_id], **timestamps)

    def _get(self, document_id: str) -> DocumentRecord:
        record = self._records.get(document_id)
        if record is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return record

    def _record_status(self, document_id: str, status: DocumentStatus) -> None:
        self.status_history.setdefault(document_id, []).append(status)


@pytest.fixture()
def memory_repo() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture()
def make_record() -> Callable[..., DocumentRecord]:
    """Build a DocumentRecord with sensible defaults; override any field by keyword."""

    def _make(**overrides: object) -> DocumentRecord:
        defaults: dict[str, object] = {
            "id": str(uuid4()),
            "filename": "abc.pdf",
            "original_name": "invoice.pdf",
            "mime_type": "application/pdf",
            "size": 1024,
            "storage_key": "documents/abc.pdf",
            "status": DocumentStatus.PROCESSED,
            "extracted_text": "",
            "summary": "",
            "keywords": [],
            "category": DocumentCategory.OTHER,
            "confidence": 0.0,
            "language": "en",
            "sentiment": 0.0,
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        defaults.update(overrides)
        return DocumentRecord(**defaults)  # type: ignore[arg-type]

    return _make
