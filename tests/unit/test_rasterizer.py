import pytest
from PIL import Image

from app.pdf.exceptions import PdfExtractionError
from app.pdf.rasterizer import PdfRasterizer


class TestPdfRasterizer:
    def test_renders_every_page_by_default(self, multi_page_pdf_bytes: bytes) -> None:
        images = PdfRasterizer(dpi=72).render_pages(multi_page_pdf_bytes)
        assert sorted(images) == [0, 1]
        assert all(isinstance(img, Image.Image) for img in images.values())
        assert all(img.mode == "RGB" for img in images.values())

    def test_renders_only_requested_pages(self, multi_page_pdf_bytes: bytes) -> None:
        images = PdfRasterizer(dpi=72).render_pages(multi_page_pdf_bytes, [1])
        assert list(images) == [1]

    def test_size_follows_dpi(self, sample_pdf_bytes: bytes) -> None:
        low = PdfRasterizer(dpi=72).render_pages(sample_pdf_bytes)[0]
        high = PdfRasterizer(dpi=144).render_pages(sample_pdf_bytes)[0]
        assert high.width == pytest.approx(low.width * 2, abs=2)
        assert high.height == pytest.approx(low.height * 2, abs=2)

    def test_out_of_range_page_raises(self, sample_pdf_bytes: bytes) -> None:
        with pytest.raises(PdfExtractionError):
            PdfRasterizer(dpi=72).render_pages(sample_pdf_bytes, [5])

    def test_invalid_bytes_raise(self) -> None:
        with pytest.raises(PdfExtractionError):
            PdfRasterizer().render_pages(b"not a pdf")

    def test_rejects_non_positive_dpi(self) -> None:
        with pytest.raises(ValueError, match="dpi"):
            PdfRasterizer(dpi=0)
