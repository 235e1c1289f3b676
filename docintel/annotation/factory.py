from typing import ClassVar

from docintel.annotation.annotator import Annotator
from docintel.annotation.client_base import BaseCompletionClient
from docintel.annotation.example_client_adapter import ExampleClientAdapter
from docintel.annotation.openai_client_adapter import OpenAIClientAdapter
from docintel.config.settings import Settings


class AnnotatorFactory:
    """Creates the configured annotator with its completion client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> Annotator:
        """Create a configured annotator from application settings."""
        return Annotator(
            client=cls.create_client(settings),
            model=settings.annotation_model_name or "example",
            temperature=settings.annotation_temperature,
        )

    @classmethod
    def create_client(cls, settings: Settings) -> BaseCompletionClient:
        provider = settings.annotation_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.annotation_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        configured = settings.annotation_base_url.strip()
        if provider == "openai":
            return configured or None
        if provider == "openai_compatible":
            if not configured:
                raise ValueError(
                    "annotation_base_url is required for "
                    "annotation_provider=openai_compatible"
                )
            return configured
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return configured or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown annotation provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        # Ollama ignores the key but the SDK still sends one.
        if provider == "ollama" and not settings.annotation_api_key:
            return "ollama"
        return settings.annotation_api_key
