from abc import ABC, abstractmethod

from PIL import Image


class BaseOcrEngine(ABC):
    """Contract for OCR engines used by the text extractor."""

    @abstractmethod
    def recognize(self, image: Image.Image) -> str:
        """Return the text recognized in *image*, verbatim.

        Raises:
            OcrError: if the engine is unavailable or recognition fails.
        """

    def shutdown(self) -> None:
        """Release any engine handle. Safe to call more than once."""
