from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from docintel.annotation.models import Annotation
from docintel.documents.models import DocumentRecord


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    custom_prompt: str | None = None
    document: DocumentRecord | None = None
    raw_bytes: bytes = b""
    extracted_text: str = ""
    annotation: Annotation | None = None
    embeddings: list[float] = field(default_factory=list)
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
