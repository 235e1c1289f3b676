"""AI-powered document annotator.

Four provider calls (summary, classification, keywords, sentiment) run
concurrently against the same text. The annotator waits for all of them and
fails as a whole on the first error; results of sibling calls are discarded.
Language and structured fields are computed locally.
"""

import contextvars
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from pathlib import Path

from docintel.annotation.client_base import BaseCompletionClient
from docintel.annotation.exceptions import AnnotationFailedError
from docintel.annotation.fields import StructuredFieldExtractor
from docintel.annotation.language import detect_language
from docintel.annotation.models import Annotation
from docintel.annotation.parsers import (
    parse_classification,
    parse_keywords,
    parse_sentiment,
    parse_summary,
)
from docintel.annotation.prompt_loader import load_prompt_template
from docintel.logging.logger import Log


class Annotator:
    """Annotates extracted text using a completion client."""

    PROVIDER_CALLS = ("summary", "classification", "keywords", "sentiment")

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.1,
        prompt_dir: Path | None = None,
        field_extractor: StructuredFieldExtractor | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._templates = {
            kind: load_prompt_template(
                kind, prompt_dir / f"{kind}.txt" if prompt_dir is not None else None
            )
            for kind in (*self.PROVIDER_CALLS, "custom_summary")
        }
        self._field_extractor = field_extractor or StructuredFieldExtractor()

    def annotate(self, text: str, custom_prompt: str | None = None) -> Annotation:
        """Produce every annotation for ``text``.

        Raises:
            AnnotationFailedError: if any provider call fails.
        """
        prompts = self._build_prompts(text, custom_prompt)
        responses = self._complete_all(prompts)

        category, confidence = parse_classification(responses["classification"])
        annotation = Annotation(
            summary=parse_summary(responses["summary"]),
            category=category,
            confidence=confidence,
            keywords=parse_keywords(responses["keywords"]),
            sentiment=parse_sentiment(responses["sentiment"]),
            language=detect_language(text),
            extracted_fields=self._field_extractor.extract(text),
        )
        Log.info(
            f"Annotation complete: category={annotation.category.value} "
            f"confidence={annotation.confidence:.2f} keywords={len(annotation.keywords)}"
        )
        return annotation

    def _build_prompts(self, text: str, custom_prompt: str | None) -> dict[str, str]:
        prompts = {
            kind: self._templates[kind].format(text=text) for kind in self.PROVIDER_CALLS
        }
        if custom_prompt:
            prompts["summary"] = self._templates["custom_summary"].format(
                custom_prompt=custom_prompt, text=text
            )
        return prompts

    def _complete_all(self, prompts: dict[str, str]) -> dict[str, str]:
        executor = ThreadPoolExecutor(
            max_workers=len(prompts), thread_name_prefix="annotate"
        )
        try:
            futures: dict[Future[str], str] = {
                # Calls inherit the bound document id.
                executor.submit(contextvars.copy_context().run, self._call_ai, prompt): kind
                for kind, prompt in prompts.items()
            }
            done, not_done = wait(futures, return_when=FIRST_EXCEPTION)
            for future in done:
                exc = future.exception()
                if exc is None:
                    continue
                for pending in not_done:
                    pending.cancel()
                kind = futures[future]
                Log.error(f"Annotation call '{kind}' failed: {exc}")
                raise AnnotationFailedError(f"AI processing failed ({kind}): {exc}") from exc
            return {futures[future]: future.result() for future in done}
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    def _call_ai(self, prompt: str) -> str:
        Log.debug(f"Annotation prompt:\n{prompt}")
        return self._client.complete(
            model=self._model,
            temperature=self._temperature,
            prompt=prompt,
        )
