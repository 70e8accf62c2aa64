import pymupdf
import pytest

from app.detection.detector import PatternDetector
from app.detection.models import DetectionResult, PiiCategory, PiiMatch
from app.redaction.exceptions import RenderError
from app.redaction.pdf_renderer import PdfRedactionRenderer


def _phones(count: int) -> tuple[PiiMatch, ...]:
    return tuple(
        PiiMatch(PiiCategory.PHONE_NUMBER, f"98765{i:05d}", f"XXXXX{i:04d}")
        for i in range(count)
    )


def _filled_rects(page: pymupdf.Page) -> list[pymupdf.Rect]:
    return [d["rect"] for d in page.get_drawings() if d.get("fill") is not None]


class TestBlockLayout:
    def test_no_matches_no_blocks(self) -> None:
        assert PdfRedactionRenderer.block_rects(DetectionResult()) == []

    def test_one_block_per_category_in_order(self) -> None:
        detection = PatternDetector().detect(
            "Aadhaar 1234 5678 9012 PAN ABCDE1234F phone 9876543210"
        )
        assert PdfRedactionRenderer.block_widths(detection) == [200, 150, 120]

    def test_multiple_ids_still_draw_one_block(self) -> None:
        detection = PatternDetector().detect("1234 5678 9012 and 2345 6789 0123")
        assert PdfRedactionRenderer.block_widths(detection) == [200]

    def test_phone_blocks_capped_at_three(self) -> None:
        detection = DetectionResult(phone_numbers=_phones(5))
        assert PdfRedactionRenderer.block_widths(detection) == [120, 120, 120]

    def test_blocks_stack_with_fixed_spacing(self) -> None:
        detection = DetectionResult(phone_numbers=_phones(3))
        rects = PdfRedactionRenderer.block_rects(detection)
        assert [r.y0 for r in rects] == [85, 110, 135]
        assert all(r.x0 == 50 and r.height == 15 for r in rects)


class TestPdfRedactionRenderer:
    def test_output_is_a_pdf_with_same_page_count(self, multi_page_pdf_bytes: bytes) -> None:
        out = PdfRedactionRenderer().render(multi_page_pdf_bytes, DetectionResult())
        with pymupdf.open(stream=out, filetype="pdf") as doc:
            assert doc.page_count == 2

    def test_every_page_is_marked(self, multi_page_pdf_bytes: bytes) -> None:
        out = PdfRedactionRenderer().render(multi_page_pdf_bytes, DetectionResult())
        with pymupdf.open(stream=out, filetype="pdf") as doc:
            for page in doc:
                assert "REDACTED DOCUMENT" in page.get_text()

    def test_blocks_drawn_on_every_page(self, multi_page_pdf_bytes: bytes) -> None:
        detection = PatternDetector().detect("PAN ABCDE1234F phone 9876543210")
        out = PdfRedactionRenderer().render(multi_page_pdf_bytes, detection)
        with pymupdf.open(stream=out, filetype="pdf") as doc:
            for page in doc:
                rects = _filled_rects(page)
                assert len(rects) == 2
                assert rects[0].x0 == pytest.approx(50, abs=1)
                assert rects[0].y0 == pytest.approx(85, abs=1)
                assert rects[0].width == pytest.approx(150, abs=1)

    def test_fixed_blocks_leave_text_layer_intact(self, id_card_pdf_bytes: bytes) -> None:
        detection = PatternDetector().detect("PAN Number: ABCDE1234F")
        out = PdfRedactionRenderer().render(id_card_pdf_bytes, detection)
        with pymupdf.open(stream=out, filetype="pdf") as doc:
            assert "ABCDE1234F" in doc[0].get_text()

    def test_locate_text_removes_matched_values(self, id_card_pdf_bytes: bytes) -> None:
        detection = PatternDetector().detect(
            "Aadhaar Number: 1234 5678 9012\nPAN Number: ABCDE1234F"
        )
        out = PdfRedactionRenderer(locate_text=True).render(id_card_pdf_bytes, detection)
        with pymupdf.open(stream=out, filetype="pdf") as doc:
            text = doc[0].get_text()
        assert "ABCDE1234F" not in text
        assert "1234 5678 9012" not in text
        assert "Government of India" in text

    def test_original_bytes_are_not_modified(self, sample_pdf_bytes: bytes) -> None:
        snapshot = bytes(sample_pdf_bytes)
        PdfRedactionRenderer().render(sample_pdf_bytes, DetectionResult())
        assert sample_pdf_bytes == snapshot

    def test_invalid_pdf_raises_render_error(self) -> None:
        with pytest.raises(RenderError, match="Failed to redact PDF"):
            PdfRedactionRenderer().render(b"not a pdf", DetectionResult())
