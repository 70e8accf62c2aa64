from app.extraction.exceptions import ExtractionError


class OcrError(ExtractionError):
    """Raised when the OCR engine cannot start or cannot read an image."""
