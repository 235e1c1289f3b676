import io

import pdfplumber

from docintel.extraction.base import BaseTextExtractor
from docintel.extraction.exceptions import ExtractionFailedError


class PdfPlumberAdapter(BaseTextExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n".join(pages).strip()
        except ExtractionFailedError:
            raise
        except Exception as exc:
            raise ExtractionFailedError(f"pdfplumber extraction failed: {exc}") from exc
