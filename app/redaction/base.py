from abc import ABC, abstractmethod

from app.detection.models import DetectionResult


class BaseRedactionRenderer(ABC):
    """Contract for one redaction strategy (paged or raster)."""

    @abstractmethod
    def render(self, original_bytes: bytes, detection: DetectionResult) -> bytes:
        """Produce redacted document bytes in the same format as the original.

        Raises:
            RenderError: if the original cannot be decoded or re-encoded.
        """
