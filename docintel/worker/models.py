from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessingJob:
    """One request to run the processing pipeline for a document."""

    document_id: str
    custom_prompt: str | None = None
