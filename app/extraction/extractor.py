import io
from typing import ClassVar

from PIL import Image, UnidentifiedImageError

from app.documents.models import ContentKind
from app.extraction.base import BaseTextExtractor
from app.extraction.exceptions import ExtractionError
from app.logging.logger import Log
from app.ocr.base import BaseOcrEngine
from app.pdf.base import BasePdfExtractor
from app.pdf.rasterizer import PdfRasterizer


class DocumentTextExtractor(BaseTextExtractor):
    """Routes raster images to OCR and PDFs to their text layer.

    PDF pages with too little embedded text are treated as scanned: they are
    rasterized and OCR'd when ``ocr_scanned_pages`` is on. Otherwise those
    pages yield ``DEGRADED_PAGE_TEXT`` and a warning is logged.
    """

    MIN_NATIVE_TEXT_LENGTH: ClassVar[int] = 10
    DEGRADED_PAGE_TEXT: ClassVar[str] = ""

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        rasterizer: PdfRasterizer,
        ocr_engine: BaseOcrEngine,
        ocr_scanned_pages: bool = True,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._rasterizer = rasterizer
        self._ocr_engine = ocr_engine
        self._ocr_scanned_pages = ocr_scanned_pages

    def extract(self, raw_bytes: bytes, content_kind: ContentKind) -> str:
        try:
            if content_kind.is_paged:
                return self._extract_pdf(raw_bytes)
            if content_kind in (ContentKind.JPEG, ContentKind.PNG):
                return self._extract_image(raw_bytes)
            raise ExtractionError(f"No extractor for content kind '{content_kind}'")
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"Text extraction failed: {exc}") from exc

    def shutdown(self) -> None:
        self._ocr_engine.shutdown()

    def _extract_image(self, raw_bytes: bytes) -> str:
        try:
            image = Image.open(io.BytesIO(raw_bytes))
            image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise ExtractionError(f"Unreadable image: {exc}") from exc
        text = self._ocr_engine.recognize(image)
        Log.debug(f"OCR recognized {len(text)} chars from {image.width}x{image.height} image")
        return text

    def _extract_pdf(self, raw_bytes: bytes) -> str:
        pages = self._pdf_extractor.extract_pages(raw_bytes)
        scanned = [
            number
            for number, text in enumerate(pages)
            if len(text) < self.MIN_NATIVE_TEXT_LENGTH
        ]

        if scanned and self._ocr_scanned_pages:
            Log.info(f"OCR fallback for {len(scanned)} of {len(pages)} PDF pages")
            images = self._rasterizer.render_pages(raw_bytes, scanned)
            for number in scanned:
                pages[number] = self._ocr_engine.recognize(images[number]).strip()
        elif scanned:
            Log.warning(
                f"{len(scanned)} of {len(pages)} PDF pages have no text layer and OCR "
                f"is disabled; extracted text is incomplete"
            )
            for number in scanned:
                pages[number] = self.DEGRADED_PAGE_TEXT

        return "\n".join(pages).strip()
