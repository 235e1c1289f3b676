"""Lexical-overlap ranking of processed documents against a free-text query.

score = 0.4 * text overlap + 0.3 * summary overlap + 0.2 * keyword overlap
        + 0.1 * stored confidence

Overlap is the fraction of query tokens (lower-cased, longer than two
characters) that substring-match, in either direction, some token of the
field. Candidates scoring <= 0 are dropped.
"""

import re
from datetime import datetime

from docintel.documents.models import DocumentRecord
from docintel.search.models import SearchResult

TEXT_WEIGHT = 0.4
SUMMARY_WEIGHT = 0.3
KEYWORD_WEIGHT = 0.2
CONFIDENCE_WEIGHT = 0.1

MIN_TOKEN_LENGTH = 3
MAX_HIGHLIGHTS = 3

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def tokenize(text: str) -> list[str]:
    return [word for word in text.lower().split() if len(word) >= MIN_TOKEN_LENGTH]


def overlap(query_tokens: list[str], field_tokens: list[str]) -> float:
    if not query_tokens:
        return 0.0
    matches = 0
    for query_word in query_tokens:
        for field_word in field_tokens:
            if query_word in field_word or field_word in query_word:
                matches += 1
                break
    return matches / len(query_tokens)


def keyword_overlap(query_tokens: list[str], keywords: list[str]) -> float:
    return overlap(query_tokens, [keyword.lower() for keyword in keywords])


def find_highlights(query_tokens: list[str], text: str) -> list[str]:
    """Sentences containing any query token, in source order, capped at MAX_HIGHLIGHTS."""
    highlights: list[str] = []
    for sentence in _SENTENCE_SPLIT_RE.split(text):
        trimmed = sentence.strip()
        if not trimmed:
            continue
        lowered = trimmed.lower()
        if any(token in lowered for token in query_tokens):
            highlights.append(trimmed)
            if len(highlights) == MAX_HIGHLIGHTS:
                break
    return highlights


class SearchRanker:
    """Scores a candidate set against a query and returns the best matches."""

    def score(self, query_tokens: list[str], document: DocumentRecord) -> float:
        score = 0.0
        if document.extracted_text:
            score += overlap(query_tokens, tokenize(document.extracted_text)) * TEXT_WEIGHT
        if document.summary:
            score += overlap(query_tokens, tokenize(document.summary)) * SUMMARY_WEIGHT
        if document.keywords:
            score += keyword_overlap(query_tokens, document.keywords) * KEYWORD_WEIGHT
        if document.confidence:
            score += document.confidence * CONFIDENCE_WEIGHT
        return score

    def rank(
        self,
        query: str,
        candidates: list[DocumentRecord],
        limit: int,
    ) -> list[SearchResult]:
        """Return at most ``limit`` results, best first.

        Equal scores are ordered by recency (newest created_at first); records
        without a timestamp come last, in input order.
        """
        query_tokens = tokenize(query)
        results: list[SearchResult] = []
        for document in candidates:
            score = self.score(query_tokens, document)
            if score <= 0:
                continue
            highlights = (
                find_highlights(query_tokens, document.extracted_text)
                if document.extracted_text
                else []
            )
            results.append(SearchResult(document=document, score=score, highlights=highlights))

        results.sort(key=lambda result: _recency_key(result.document.created_at))
        results.sort(key=lambda result: result.score, reverse=True)
        return results[:limit]


def _recency_key(created_at: datetime | None) -> tuple[int, float]:
    if created_at is None:
        return (1, 0.0)
    return (0, -created_at.timestamp())
