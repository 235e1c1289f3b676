import pymupdf

from docintel.extraction.base import BaseTextExtractor
from docintel.extraction.exceptions import ExtractionFailedError


class PyMuPdfAdapter(BaseTextExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract(self, data: bytes) -> str:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
            return "\n".join(pages).strip()
        except ExtractionFailedError:
            raise
        except Exception as exc:
            raise ExtractionFailedError(f"pymupdf extraction failed: {exc}") from exc
