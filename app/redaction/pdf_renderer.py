"""Paged redaction with PyMuPDF.

The blocks drawn here sit at fixed coordinates near the top of each page, not
over the matched text: extraction does not report glyph positions. This is an
approximation and must not be presented as precise redaction. With
``locate_text`` enabled the renderer additionally searches each page's text
layer for the matched values and applies real redaction annotations there,
which removes the underlying text. Scanned pages have no text layer to search.
"""

from typing import ClassVar

import pymupdf

from app.detection.models import DetectionResult
from app.logging.logger import Log
from app.pdf.mupdf import MUPDF_LOCK
from app.redaction.base import BaseRedactionRenderer
from app.redaction.exceptions import RenderError

_BLACK = (0, 0, 0)
_MARK_RED = (0.8, 0.1, 0.1)


class PdfRedactionRenderer(BaseRedactionRenderer):
    """Draws fixed redaction blocks and a REDACTED marking on every page."""

    LEFT: ClassVar[float] = 50
    FIRST_BLOCK_TOP: ClassVar[float] = 85
    BLOCK_HEIGHT: ClassVar[float] = 15
    BLOCK_SPACING: ClassVar[float] = 25
    NATIONAL_ID_BLOCK_WIDTH: ClassVar[float] = 200
    TAX_ID_BLOCK_WIDTH: ClassVar[float] = 150
    PHONE_BLOCK_WIDTH: ClassVar[float] = 120
    MAX_PHONE_BLOCKS: ClassVar[int] = 3

    MARK_TEXT: ClassVar[str] = "REDACTED DOCUMENT"
    MARK_BASELINE: ClassVar[float] = 50
    MARK_FONT_SIZE: ClassVar[float] = 12

    def __init__(self, locate_text: bool = False) -> None:
        self._locate_text = locate_text

    def render(self, original_bytes: bytes, detection: DetectionResult) -> bytes:
        try:
            with MUPDF_LOCK, pymupdf.open(stream=original_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                rects = self.block_rects(detection)
                located = 0
                for page in doc:
                    if self._locate_text:
                        located += self._redact_located_text(page, detection)
                    for rect in rects:
                        page.draw_rect(rect, color=_BLACK, fill=_BLACK)
                    page.insert_text(
                        (self.LEFT, self.MARK_BASELINE),
                        self.MARK_TEXT,
                        fontsize=self.MARK_FONT_SIZE,
                        color=_MARK_RED,
                    )
                Log.debug(
                    f"Redacted {doc.page_count} PDF pages with {len(rects)} fixed blocks"
                    f" and {located} located hits"
                )
                return doc.tobytes(garbage=3, deflate=True)
        except RenderError:
            raise
        except Exception as exc:
            raise RenderError(f"Failed to redact PDF document: {exc}") from exc

    @classmethod
    def block_widths(cls, detection: DetectionResult) -> list[float]:
        """Widths of the blocks to stack, top to bottom."""
        widths: list[float] = []
        if detection.national_id_numbers:
            widths.append(cls.NATIONAL_ID_BLOCK_WIDTH)
        if detection.tax_id_numbers:
            widths.append(cls.TAX_ID_BLOCK_WIDTH)
        phone_blocks = min(len(detection.phone_numbers), cls.MAX_PHONE_BLOCKS)
        widths.extend([cls.PHONE_BLOCK_WIDTH] * phone_blocks)
        return widths

    @classmethod
    def block_rects(cls, detection: DetectionResult) -> list[pymupdf.Rect]:
        """Page rectangles of the fixed blocks, in top-left origin coordinates."""
        rects = []
        top = cls.FIRST_BLOCK_TOP
        for width in cls.block_widths(detection):
            rects.append(
                pymupdf.Rect(cls.LEFT, top, cls.LEFT + width, top + cls.BLOCK_HEIGHT)
            )
            top += cls.BLOCK_SPACING
        return rects

    def _redact_located_text(self, page: pymupdf.Page, detection: DetectionResult) -> int:
        hits = 0
        for match in detection.all_matches:
            for rect in page.search_for(match.original):
                page.add_redact_annot(rect, fill=_BLACK)
                hits += 1
        if hits:
            page.apply_redactions()
        return hits
