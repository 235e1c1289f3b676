"""Dispatches raw bytes to a format adapter by declared media type."""

from enum import Enum

from docintel.extraction.base import BaseTextExtractor
from docintel.extraction.exceptions import ExtractionFailedError, UnsupportedMediaTypeError
from docintel.logging.logger import Log


class MediaFamily(str, Enum):
    PDF = "pdf"
    WORD = "word"
    TEXT = "text"
    IMAGE = "image"


def classify_media_type(media_type: str) -> MediaFamily | None:
    """Return the extractor family for a declared media type, or None."""
    mime = media_type.split(";", 1)[0].strip().lower()
    if mime == "application/pdf":
        return MediaFamily.PDF
    if "word" in mime or "docx" in mime:
        return MediaFamily.WORD
    if mime == "text/plain":
        return MediaFamily.TEXT
    if mime.startswith("image/"):
        return MediaFamily.IMAGE
    return None


class TextExtractor:
    """Converts a byte buffer plus declared media type into plain text.

    The media type is trusted as declared; content is never sniffed.
    """

    def __init__(self, adapters: dict[MediaFamily, BaseTextExtractor]) -> None:
        self._adapters = adapters

    def extract(self, data: bytes, media_type: str) -> str:
        """Extract text from ``data``.

        Raises:
            UnsupportedMediaTypeError: if no adapter handles ``media_type``.
            ExtractionFailedError: if the adapter fails.
        """
        family = classify_media_type(media_type)
        adapter = self._adapters.get(family) if family is not None else None
        if adapter is None:
            raise UnsupportedMediaTypeError(f"Unsupported file type: {media_type}")

        try:
            text = adapter.extract(data)
        except ExtractionFailedError as exc:
            Log.error(f"Text extraction failed for {media_type}: {exc}")
            raise
        except Exception as exc:
            Log.error(f"Text extraction failed for {media_type}: {exc}")
            raise ExtractionFailedError(f"Text extraction failed: {exc}") from exc

        Log.debug(f"Extracted {len(text)} chars from {len(data)} bytes of {media_type}")
        return text
