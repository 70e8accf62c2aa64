from abc import ABC, abstractmethod

from app.detection.models import DetectionResult


class BaseDetector(ABC):
    """Contract for all sensitive-data detectors."""

    @abstractmethod
    def detect(self, text: str) -> DetectionResult:
        """Find sensitive values in extracted text.

        Args:
            text: Plain text from the extraction step.

        Returns:
            DetectionResult grouped by category. Never raises; text without
            matches yields empty collections.
        """
