class AnnotationFailedError(Exception):
    """Raised when annotation fails; no partial annotation is produced."""


class AnnotationNetworkError(AnnotationFailedError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
