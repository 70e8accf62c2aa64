from abc import ABC, abstractmethod

from app.documents.models import ContentKind


class BaseTextExtractor(ABC):
    """Uniform text extraction over every accepted content kind."""

    @abstractmethod
    def extract(self, raw_bytes: bytes, content_kind: ContentKind) -> str:
        """Extract plain text from a document.

        Args:
            raw_bytes: Original document content.
            content_kind: Declared kind of the document.

        Returns:
            Extracted text. In degraded mode (PDF pages without a text layer
            and OCR disabled) parts of the document contribute no text.

        Raises:
            ExtractionError: on unreadable bytes, unsupported kinds or OCR
                engine failure.
        """

    def shutdown(self) -> None:
        """Release engine handles held by the extractor."""
