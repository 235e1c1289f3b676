from docintel.extraction.base import BaseTextExtractor
from docintel.extraction.exceptions import ExtractionFailedError


class PlainTextAdapter(BaseTextExtractor):
    """Decodes plain text files as UTF-8."""

    def extract(self, data: bytes) -> str:
        try:
            return data.decode("utf-8").strip()
        except UnicodeDecodeError as exc:
            raise ExtractionFailedError(f"text is not valid UTF-8: {exc}") from exc
