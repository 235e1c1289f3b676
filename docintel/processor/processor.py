from docintel.annotation.embeddings import EmbeddingGenerator
from docintel.annotation.factory import AnnotatorFactory
from docintel.config.settings import Settings
from docintel.database.repositories.document_repository import DocumentRepository
from docintel.extraction.factory import TextExtractorFactory
from docintel.logging.logger import Log, Timer
from docintel.processor.exceptions import DocumentNotFoundError
from docintel.processor.pipeline import PipelineContext, PipelineStep
from docintel.processor.steps import (
    AnnotateStep,
    EmbedStep,
    ExtractTextStep,
    LoadDocumentStep,
    MarkFailedStep,
    MarkProcessingStep,
    PersistExtractedTextStep,
    PersistResultsStep,
)
from docintel.storage.base import BaseStorage


class Processor:
    """Drives one document through the processing pipeline.

    Pipeline: mark processing -> load -> extract -> persist text -> annotate
    -> embed -> persist results (status processed).

    Failures never propagate: the document is marked failed with the error
    message in metadata. A document that disappears mid-run is a silent no-op.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, document_id: str, custom_prompt: str | None = None) -> None:
        """Run the full processing pipeline for a document."""
        Log.info(f"Processing document {document_id}", custom_prompt=custom_prompt is not None)
        context = PipelineContext(document_id=document_id, custom_prompt=custom_prompt)
        with Timer() as total:
            try:
                for step in self._steps:
                    with Timer() as step_timer:
                        context = step.run(context)
                    Log.debug(
                        f"Step {type(step).__name__} done", elapsed_ms=step_timer.elapsed_ms
                    )
            except DocumentNotFoundError:
                Log.info(f"Document {document_id} no longer exists, skipping")
                return
            except Exception as exc:
                context.error_message = str(exc) or type(exc).__name__
                Log.exception(f"Document processing failed for {document_id}: {exc}")
                self._mark_failed(context)
                return

        Log.info(f"Document {document_id} processed successfully", elapsed_ms=total.elapsed_ms)

    def _mark_failed(self, context: PipelineContext) -> None:
        try:
            self._failed_step.run(context)
        except DocumentNotFoundError:
            Log.info(f"Document {context.document_id} deleted before failure was recorded")
        except Exception as exc:
            Log.error(f"Could not record failure for document {context.document_id}: {exc}")


def build_processor(
    settings: Settings,
    doc_repo: DocumentRepository,
    storage: BaseStorage,
) -> Processor:
    """Build a Processor with all required adapters."""
    steps: list[PipelineStep] = [
        MarkProcessingStep(doc_repo),
        LoadDocumentStep(storage=storage, doc_repo=doc_repo),
        ExtractTextStep(text_extractor=TextExtractorFactory.create(settings)),
        PersistExtractedTextStep(doc_repo=doc_repo),
        AnnotateStep(annotator=AnnotatorFactory.create(settings)),
        EmbedStep(embedding_generator=EmbeddingGenerator()),
        PersistResultsStep(doc_repo=doc_repo),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(doc_repo))
