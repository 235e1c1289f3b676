class ExtractionError(Exception):
    """Base exception for text extraction."""


class UnsupportedMediaTypeError(ExtractionError):
    """Raised when no extractor handles the declared media type."""


class ExtractionFailedError(ExtractionError):
    """Raised when an extractor fails on a file of a supported type."""
