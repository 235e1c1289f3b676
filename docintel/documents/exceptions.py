class DocumentValidationError(Exception):
    """Raised when an uploaded file is rejected before it is stored."""


class FileTooLargeError(DocumentValidationError):
    """Raised when an uploaded file exceeds the configured size limit."""
