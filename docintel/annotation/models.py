from dataclasses import dataclass, field

from docintel.documents.models import DocumentCategory


@dataclass(frozen=True)
class Annotation:
    """Output of the annotation step."""

    summary: str
    category: DocumentCategory
    confidence: float
    keywords: list[str]
    sentiment: float
    language: str
    extracted_fields: dict[str, list[str]] = field(default_factory=dict)
