import io

import pytest
from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def _pdf(*pages: list[str]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 20
        c.showPage()
    c.save()
    return buf.getvalue()


def _image(image_format: str, size: tuple[int, int] = (400, 300)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(255, 255, 255)).save(buf, format=image_format)
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single-page PDF with known text content."""
    return _pdf(["Hello PDF World"])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Two-page PDF with known text on each page."""
    return _pdf(["Page one content"], ["Page two content"])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Valid PDF with a single blank page (no text layer)."""
    return _pdf([])


@pytest.fixture()
def id_card_pdf_bytes() -> bytes:
    """PDF carrying one Aadhaar number, one PAN and one phone number."""
    return _pdf(
        [
            "Government of India",
            "Aadhaar Number: 1234 5678 9012",
            "PAN Number: ABCDE1234F",
            "Phone: +91 9876543210",
        ]
    )


@pytest.fixture()
def png_bytes() -> bytes:
    return _image("PNG")


@pytest.fixture()
def jpeg_bytes() -> bytes:
    return _image("JPEG")


@pytest.fixture()
def small_png_bytes() -> bytes:
    """Image smaller than the default photo region."""
    return _image("PNG", size=(100, 80))
