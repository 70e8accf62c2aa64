import threading

import pytesseract
from PIL import Image

from app.logging.logger import Log
from app.ocr.base import BaseOcrEngine
from app.ocr.exceptions import OcrError


class TesseractOcrEngine(BaseOcrEngine):
    """OCR through the Tesseract binary via pytesseract.

    The engine is initialized lazily on the first recognition and stays ready
    for the life of the process until :meth:`shutdown`. Concurrent callers are
    bounded by a semaphore sized to ``max_concurrency``; the default of 1
    serializes every recognition.
    """

    def __init__(
        self,
        language: str = "eng",
        tesseract_cmd: str = "",
        max_concurrency: int = 1,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self._language = language
        self._tesseract_cmd = tesseract_cmd
        self._init_lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(max_concurrency)
        self._version: str | None = None

    @property
    def is_initialized(self) -> bool:
        return self._version is not None

    def recognize(self, image: Image.Image) -> str:
        self._ensure_initialized()
        with self._slots:
            try:
                return str(pytesseract.image_to_string(image, lang=self._language))
            except Exception as exc:
                raise OcrError(f"Tesseract failed to recognize image: {exc}") from exc

    def shutdown(self) -> None:
        with self._init_lock:
            if self._version is not None:
                Log.info("Tesseract OCR engine shut down")
            self._version = None

    def _ensure_initialized(self) -> None:
        if self._version is not None:
            return
        with self._init_lock:
            if self._version is not None:
                return
            if self._tesseract_cmd:
                pytesseract.pytesseract.tesseract_cmd = self._tesseract_cmd
            try:
                version = pytesseract.get_tesseract_version()
            except Exception as exc:
                raise OcrError(f"Tesseract OCR engine is not available: {exc}") from exc
            self._version = str(version)
            Log.info(f"Tesseract OCR engine {self._version} initialized (lang={self._language})")
