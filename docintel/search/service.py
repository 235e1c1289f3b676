from docintel.database.repositories.document_repository import DocumentRepository
from docintel.documents.models import DocumentCategory, DocumentRecord
from docintel.logging.logger import Log
from docintel.search.exceptions import SearchError
from docintel.search.models import SearchFilters, SearchQuery, SearchResult
from docintel.search.ranker import SearchRanker

# Candidates fetched per requested result, leaving room to reorder by relevance.
OVERFETCH_FACTOR = 2


class SearchService:
    """Fetches processed candidates and ranks them for a query."""

    def __init__(self, repository: DocumentRepository, ranker: SearchRanker) -> None:
        self._repository = repository
        self._ranker = ranker

    def search(self, search_query: SearchQuery) -> list[SearchResult]:
        try:
            candidates = self._repository.list_processed(
                search_query.filters,
                search_query.limit * OVERFETCH_FACTOR,
            )
        except Exception as exc:
            Log.error(f"Search failed: {exc}")
            raise SearchError("Search operation failed") from exc

        results = self._ranker.rank(search_query.query, candidates, search_query.limit)
        Log.info(
            f"Search '{search_query.query}': {len(results)} results "
            f"from {len(candidates)} candidates"
        )
        return results

    def by_category(self, category: DocumentCategory) -> list[DocumentRecord]:
        return self._repository.list_processed(SearchFilters(category=category))

    def by_language(self, language: str) -> list[DocumentRecord]:
        return self._repository.list_processed(SearchFilters(language=language))
