from app.config.settings import Settings
from app.ocr.base import BaseOcrEngine
from app.ocr.tesseract_adapter import TesseractOcrEngine


class OcrEngineFactory:
    """Creates the OCR engine named by ``settings.ocr_engine``."""

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrEngine:
        engine = settings.ocr_engine.strip().lower()
        if engine == "tesseract":
            return TesseractOcrEngine(
                language=settings.ocr_language,
                tesseract_cmd=settings.tesseract_cmd,
                max_concurrency=settings.ocr_max_concurrency,
            )
        raise ValueError(f"Unknown OCR engine '{engine}'. Choose from: ['tesseract']")
