from datetime import datetime, timezone

from docintel.annotation.annotator import Annotator
from docintel.annotation.embeddings import EmbeddingGenerator
from docintel.database.repositories.document_repository import DocumentRepository
from docintel.documents.models import DocumentStatus
from docintel.extraction.extractor import TextExtractor
from docintel.logging.logger import Log
from docintel.processor.exceptions import DocumentNotFoundError
from docintel.processor.pipeline import PipelineContext, PipelineStep
from docintel.storage.base import BaseStorage


class MarkProcessingStep(PipelineStep):
    def __init__(self, doc_repo: DocumentRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.update_status(context.document_id, DocumentStatus.PROCESSING)
        Log.info(f"Document {context.document_id} marked as processing")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, doc_repo: DocumentRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.update_status(
            context.document_id,
            DocumentStatus.FAILED,
            {
                "error": context.error_message,
                "failed_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        Log.error(f"Document {context.document_id} marked as failed: {context.error_message}")
        return context


class LoadDocumentStep(PipelineStep):
    def __init__(self, storage: BaseStorage, doc_repo: DocumentRepository) -> None:
        self._storage = storage
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        document = self._doc_repo.find_by_id(context.document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {context.document_id} not found")
        context.document = document
        context.raw_bytes = self._storage.get(document.storage_key)
        Log.info(f"Loaded {len(context.raw_bytes)} bytes for document {context.document_id}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before extraction")
        context.extracted_text = self._text_extractor.extract(
            context.raw_bytes, context.document.mime_type
        )
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from document {context.document_id}"
        )
        return context


class PersistExtractedTextStep(PipelineStep):
    """Stores the text before annotation so it survives an annotation failure."""

    def __init__(self, doc_repo: DocumentRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._doc_repo.update_fields(
            context.document_id, {"extracted_text": context.extracted_text}
        )
        return context


class AnnotateStep(PipelineStep):
    def __init__(self, annotator: Annotator) -> None:
        self._annotator = annotator

    def run(self, context: PipelineContext) -> PipelineContext:
        context.annotation = self._annotator.annotate(
            context.extracted_text, custom_prompt=context.custom_prompt
        )
        Log.info(
            f"Annotated document {context.document_id}: "
            f"{context.annotation.category.value} ({context.annotation.language})"
        )
        return context


class EmbedStep(PipelineStep):
    def __init__(self, embedding_generator: EmbeddingGenerator) -> None:
        self._embedding_generator = embedding_generator

    def run(self, context: PipelineContext) -> PipelineContext:
        context.embeddings = self._embedding_generator.generate(context.extracted_text)
        return context


class PersistResultsStep(PipelineStep):
    """Writes every annotation field and the processed status in one update."""

    def __init__(self, doc_repo: DocumentRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.annotation is None:
            raise ValueError("PipelineContext.annotation must be set before persist")
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before persist")
        annotation = context.annotation
        metadata = {
            key: value
            for key, value in context.document.metadata.items()
            if key not in ("error", "failed_at")
        }
        self._doc_repo.update_fields(
            context.document_id,
            {
                "status": DocumentStatus.PROCESSED,
                "extracted_text": context.extracted_text,
                "summary": annotation.summary,
                "keywords": annotation.keywords,
                "category": annotation.category,
                "confidence": annotation.confidence,
                "language": annotation.language,
                "sentiment": annotation.sentiment,
                "extracted_fields": annotation.extracted_fields,
                "embeddings": context.embeddings,
                "metadata": metadata,
            },
        )
        return context
