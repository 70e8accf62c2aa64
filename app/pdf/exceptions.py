from app.extraction.exceptions import ExtractionError


class PdfExtractionError(ExtractionError):
    """Raised when a PDF cannot be opened, read or rasterized."""
