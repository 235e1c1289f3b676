import re
from typing import ClassVar


class StructuredFieldExtractor:
    """Regex-based extraction of dates, amounts, emails and phone numbers."""

    _DATE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b\d{1,2}[/\-]\d{1,2}[/\-]\d{2,4}\b"
        r"|\b\d{4}[/\-]\d{1,2}[/\-]\d{1,2}\b",
    )
    _AMOUNT_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\$[\d,]+\.?\d*"
        r"|\d+\.?\d*\s*(?:USD|EUR|GBP|PLN)",
        re.IGNORECASE,
    )
    _EMAIL_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
    )
    _PHONE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"(?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}",
    )

    _RULES: ClassVar[list[tuple[str, re.Pattern[str]]]] = [
        ("dates", _DATE_RE),
        ("amounts", _AMOUNT_RE),
        ("emails", _EMAIL_RE),
        ("phones", _PHONE_RE),
    ]

    def extract(self, text: str) -> dict[str, list[str]]:
        """Return matched substrings per field kind; kinds without matches are omitted."""
        fields: dict[str, list[str]] = {}
        for name, pattern in self._RULES:
            matches = [match.group(0) for match in pattern.finditer(text)]
            if matches:
                fields[name] = matches
        return fields


def extract_structured_fields(text: str) -> dict[str, list[str]]:
    return StructuredFieldExtractor().extract(text)
