from docintel.config.settings import Settings
from docintel.extraction.base import BaseTextExtractor
from docintel.extraction.docx_adapter import DocxAdapter
from docintel.extraction.extractor import MediaFamily, TextExtractor
from docintel.extraction.ocr_adapter import TesseractOcrAdapter
from docintel.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docintel.extraction.plain_text_adapter import PlainTextAdapter
from docintel.extraction.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the correct PDF extractor based on settings."""

    ADAPTERS: dict[str, type[BaseTextExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()


class TextExtractorFactory:
    """Wires one adapter per media family."""

    @classmethod
    def create(cls, settings: Settings) -> TextExtractor:
        return TextExtractor(
            {
                MediaFamily.PDF: PdfExtractorFactory.create(settings),
                MediaFamily.WORD: DocxAdapter(),
                MediaFamily.TEXT: PlainTextAdapter(),
                MediaFamily.IMAGE: TesseractOcrAdapter(
                    languages=settings.ocr_languages,
                    tesseract_cmd=settings.tesseract_cmd,
                ),
            }
        )
