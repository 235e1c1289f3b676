from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class DocumentStatus(str, Enum):
    """Processing state of a document.

    uploaded -> processing -> processed | failed. Reprocessing re-enters
    processing from any state.
    """

    UPLOADED = "uploaded"
    PROCESSING = "processing"
    PROCESSED = "processed"
    FAILED = "failed"


class DocumentCategory(str, Enum):
    """Closed set of categories the classifier may assign."""

    INVOICE = "invoice"
    CONTRACT = "contract"
    REPORT = "report"
    RECEIPT = "receipt"
    FORM = "form"
    OTHER = "other"

    @classmethod
    def parse(cls, raw: str) -> "DocumentCategory":
        """Map free-form classifier output onto a category; unknown -> OTHER."""
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    filename: str
    original_name: str
    mime_type: str
    size: int
    storage_key: str
    status: DocumentStatus = DocumentStatus.UPLOADED
    extracted_text: str | None = None
    summary: str | None = None
    keywords: list[str] = field(default_factory=list)
    category: DocumentCategory | None = None
    confidence: float | None = None
    language: str | None = None
    sentiment: float | None = None
    extracted_fields: dict[str, list[str]] = field(default_factory=dict)
    embeddings: list[float] = field(default_factory=list)
    metadata: dict[str, object] = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_fully_annotated(self) -> bool:
        return all(
            value is not None
            for value in (
                self.extracted_text,
                self.summary,
                self.category,
                self.confidence,
                self.language,
                self.sentiment,
            )
        )
