from collections.abc import Iterable

import pymupdf
from PIL import Image

from app.pdf.exceptions import PdfExtractionError
from app.pdf.mupdf import MUPDF_LOCK


class PdfRasterizer:
    """Renders PDF pages to Pillow images so they can be OCR'd."""

    def __init__(self, dpi: int = 300) -> None:
        if dpi <= 0:
            raise ValueError(f"dpi must be positive, got {dpi}")
        self._dpi = dpi

    def render_pages(
        self,
        pdf_bytes: bytes,
        page_numbers: Iterable[int] | None = None,
    ) -> dict[int, Image.Image]:
        """Render the requested zero-based pages (all pages when omitted).

        Raises:
            PdfExtractionError: if the document cannot be opened or a page
                number is out of range.
        """
        try:
            with MUPDF_LOCK, pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                wanted = range(doc.page_count) if page_numbers is None else page_numbers
                images: dict[int, Image.Image] = {}
                for number in wanted:
                    pix = doc[number].get_pixmap(dpi=self._dpi, alpha=False)
                    images[number] = Image.frombytes(
                        "RGB", (pix.width, pix.height), pix.samples
                    )
                return images
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"Failed to rasterize PDF: {exc}") from exc
