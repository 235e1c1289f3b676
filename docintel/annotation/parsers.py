"""Parses raw provider responses into typed annotation values."""

import re

from docintel.documents.models import DocumentCategory

DEFAULT_CONFIDENCE = 0.5
DEFAULT_SENTIMENT = 0.0

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)")


def _first_float(raw: str) -> float | None:
    match = _NUMBER_RE.search(raw)
    if match is None:
        return None
    try:
        return float(match.group(0))
    except ValueError:
        return None


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def parse_classification(raw: str) -> tuple[DocumentCategory, float]:
    """Parse a ``category|confidence`` response.

    Splits on the first ``|``. A missing or unparsable confidence falls back
    to DEFAULT_CONFIDENCE.
    """
    category_part, _, confidence_part = raw.partition("|")
    category = DocumentCategory.parse(category_part)
    confidence = _first_float(confidence_part)
    if confidence is None:
        confidence = DEFAULT_CONFIDENCE
    return category, _clamp(confidence, 0.0, 1.0)


def parse_keywords(raw: str) -> list[str]:
    return [keyword.strip() for keyword in raw.split(",") if keyword.strip()]


def parse_sentiment(raw: str) -> float:
    score = _first_float(raw)
    if score is None:
        return DEFAULT_SENTIMENT
    return _clamp(score, -1.0, 1.0)


def parse_summary(raw: str) -> str:
    return raw.strip()
