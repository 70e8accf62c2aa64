from app.config.settings import Settings
from app.extraction.base import BaseTextExtractor
from app.extraction.extractor import DocumentTextExtractor
from app.ocr.factory import OcrEngineFactory
from app.pdf.factory import PdfExtractorFactory
from app.pdf.rasterizer import PdfRasterizer


class TextExtractorFactory:
    """Creates the text extractor with its configured PDF and OCR engines."""

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        return DocumentTextExtractor(
            pdf_extractor=PdfExtractorFactory.create(settings),
            rasterizer=PdfRasterizer(dpi=settings.pdf_render_dpi),
            ocr_engine=OcrEngineFactory.create(settings),
            ocr_scanned_pages=settings.pdf_ocr_enabled,
        )
