import io

from docx import Document

from docintel.extraction.base import BaseTextExtractor
from docintel.extraction.exceptions import ExtractionFailedError


class DocxAdapter(BaseTextExtractor):
    """Extracts paragraph and table text from Word documents using python-docx."""

    def extract(self, data: bytes) -> str:
        try:
            document = Document(io.BytesIO(data))
            lines = [p.text.strip() for p in document.paragraphs if p.text.strip()]
            for table in document.tables:
                for row in table.rows:
                    cells = [cell.text.strip() for cell in row.cells]
                    if any(cells):
                        lines.append(" | ".join(cells))
            return "\n".join(lines).strip()
        except Exception as exc:
            raise ExtractionFailedError(f"docx extraction failed: {exc}") from exc
