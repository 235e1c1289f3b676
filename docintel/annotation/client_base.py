from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific text completion clients."""

    @abstractmethod
    def complete(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
    ) -> str:
        """Return provider response as plain text."""
