from abc import ABC, abstractmethod


class BasePdfExtractor(ABC):
    """Contract for all PDF text-layer adapters."""

    @abstractmethod
    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Read the embedded text layer of every page.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            One stripped string per page, in page order. Scanned pages without
            a text layer come back as empty strings.

        Raises:
            PdfExtractionError: if the document cannot be read.
        """
