import pytest

from docintel.annotation.parsers import (
    DEFAULT_CONFIDENCE,
    parse_classification,
    parse_keywords,
    parse_sentiment,
    parse_summary,
)
from docintel.documents.models import DocumentCategory


class TestParseClassification:
    def test_parses_category_and_confidence(self) -> None:
        assert parse_classification("invoice|0.92") == (DocumentCategory.INVOICE, 0.92)

    def test_trims_and_lowercases_category(self) -> None:
        category, _ = parse_classification("  Contract |0.8")
        assert category is DocumentCategory.CONTRACT

    def test_splits_on_first_pipe_only(self) -> None:
        category, confidence = parse_classification("report|0.7|extra")
        assert category is DocumentCategory.REPORT
        assert confidence == 0.7

    def test_missing_confidence_defaults(self) -> None:
        assert parse_classification("receipt") == (DocumentCategory.RECEIPT, DEFAULT_CONFIDENCE)

    def test_unparsable_confidence_defaults(self) -> None:
        _, confidence = parse_classification("form|high")
        assert confidence == DEFAULT_CONFIDENCE

    def test_unknown_category_maps_to_other(self) -> None:
        category, _ = parse_classification("memo|0.4")
        assert category is DocumentCategory.OTHER

    def test_confidence_is_clamped(self) -> None:
        _, confidence = parse_classification("invoice|7")
        assert confidence == 1.0


class TestParseKeywords:
    def test_splits_trims_and_drops_empties(self) -> None:
        assert parse_keywords(" tax, invoice ,, ,payment ") == ["tax", "invoice", "payment"]

    def test_empty_response(self) -> None:
        assert parse_keywords("") == []


class TestParseSentiment:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("0.6", 0.6), ("-0.25\n", -0.25), ("Score: 0.3", 0.3), ("neutral", 0.0), ("", 0.0)],
    )
    def test_parses_or_defaults(self, raw: str, expected: float) -> None:
        assert parse_sentiment(raw) == expected

    def test_clamps_to_range(self) -> None:
        assert parse_sentiment("-4") == -1.0


class TestParseSummary:
    def test_trims(self) -> None:
        assert parse_summary("  A short summary.\n") == "A short summary."
