"""Example completion client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseCompletionClient and register the provider in AnnotatorFactory.
"""

from typing import ClassVar

from docintel.annotation.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Example adapter that answers each prompt kind with a fixed response.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters.
    """

    DEFAULT_RESPONSES: ClassVar[dict[str, str]] = {
        "Summary:": "Example summary of the document.",
        "Classification:": "other|0.5",
        "Keywords:": "example, document",
        "Sentiment score:": "0",
    }

    def complete(
        self,
        *,
        model: str,
        temperature: float,
        prompt: str,
    ) -> str:
        _ = model, temperature
        tail = prompt.rstrip()
        for marker, response in self.DEFAULT_RESPONSES.items():
            if tail.endswith(marker):
                return response
        return ""
