import io

import pytesseract
from PIL import Image

from docintel.extraction.base import BaseTextExtractor
from docintel.extraction.exceptions import ExtractionFailedError
from docintel.logging.logger import Log


class TesseractOcrAdapter(BaseTextExtractor):
    """Extracts text from images with Tesseract OCR."""

    def __init__(self, languages: str = "eng", tesseract_cmd: str = "") -> None:
        self._languages = languages
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def extract(self, data: bytes) -> str:
        try:
            with Image.open(io.BytesIO(data)) as image:
                Log.debug(
                    f"Running OCR on {image.format} image {image.size[0]}x{image.size[1]}"
                )
                text = pytesseract.image_to_string(image, lang=self._languages)
            return text.strip()
        except Exception as exc:
            raise ExtractionFailedError(f"OCR extraction failed: {exc}") from exc
