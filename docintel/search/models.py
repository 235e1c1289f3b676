from dataclasses import dataclass, field

from docintel.documents.models import DocumentCategory, DocumentRecord


@dataclass(frozen=True)
class SearchFilters:
    """Upstream candidate filters; None means unfiltered."""

    category: DocumentCategory | None = None
    language: str | None = None
    min_confidence: float | None = None


@dataclass(frozen=True)
class SearchQuery:
    query: str
    limit: int = 10
    category: DocumentCategory | None = None
    language: str | None = None
    min_confidence: float | None = None

    @property
    def filters(self) -> SearchFilters:
        return SearchFilters(
            category=self.category,
            language=self.language,
            min_confidence=self.min_confidence,
        )


@dataclass
class SearchResult:
    """A ranked document with the sentences that justify the match."""

    document: DocumentRecord
    score: float
    highlights: list[str] = field(default_factory=list)
