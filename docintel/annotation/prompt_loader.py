from pathlib import Path

from docintel.annotation.exceptions import AnnotationFailedError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

PROMPT_KINDS = ("summary", "classification", "keywords", "sentiment", "custom_summary")


def load_prompt_template(kind: str, path: Path | None = None) -> str:
    """Load an annotation prompt template from a file.

    Args:
        kind: One of PROMPT_KINDS.
        path: Path to the prompt template file.
              Defaults to the bundled prompts/{kind}.txt.

    Returns:
        The raw template string with placeholders.

    Raises:
        AnnotationFailedError: if the file cannot be read.
    """
    if path is None:
        if kind not in PROMPT_KINDS:
            raise AnnotationFailedError(f"Unknown prompt kind '{kind}'")
        path = _DEFAULT_PROMPT_DIR / f"{kind}.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise AnnotationFailedError(f"Failed to load prompt template: {exc}") from exc
