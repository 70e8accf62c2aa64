import threading
from collections.abc import Generator
from pathlib import Path

import pytest
from PIL import Image

from app.config.settings import Settings
from app.documents.store import InMemoryDocumentStore
from app.extraction.extractor import DocumentTextExtractor
from app.ocr.base import BaseOcrEngine
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.rasterizer import PdfRasterizer
from app.processor.processor import build_processor
from app.service.document_service import DocumentService
from app.storage.file_storage import LocalFileStorage
from app.worker.job_runner import JobRunner
from app.worker.worker import Worker

ID_CARD_TEXT = (
    "GOVERNMENT OF INDIA\n"
    "Aadhaar: 1234 5678 9012\n"
    "PAN: ABCDE1234F\n"
    "Mobile: +91 9876543210"
)


class StaticOcrEngine(BaseOcrEngine):
    """Returns fixed text for every image and counts its calls."""

    def __init__(self, text: str = ID_CARD_TEXT) -> None:
        self.text = text
        self.calls = 0
        self.closed = False
        self._lock = threading.Lock()

    def recognize(self, image: Image.Image) -> str:
        with self._lock:
            self.calls += 1
        return self.text

    def shutdown(self) -> None:
        self.closed = True


@pytest.fixture()
def integration_settings(tmp_path: Path) -> Settings:
    return Settings(files_root=tmp_path, worker_count=3, pdf_render_dpi=72)


@pytest.fixture()
def ocr_engine() -> StaticOcrEngine:
    return StaticOcrEngine()


@pytest.fixture()
def service(
    integration_settings: Settings, ocr_engine: StaticOcrEngine
) -> Generator[DocumentService, None, None]:
    """Fully wired service with real storage, renderers and worker pool."""
    store = InMemoryDocumentStore()
    file_storage = LocalFileStorage(files_root=integration_settings.files_root)
    text_extractor = DocumentTextExtractor(
        pdf_extractor=PdfPlumberAdapter(),
        rasterizer=PdfRasterizer(dpi=integration_settings.pdf_render_dpi),
        ocr_engine=ocr_engine,
    )
    processor = build_processor(integration_settings, store, file_storage, text_extractor)
    worker = Worker(JobRunner(processor), integration_settings)
    svc = DocumentService(
        store=store,
        file_storage=file_storage,
        worker=worker,
        max_upload_bytes=integration_settings.max_upload_bytes,
        text_extractor=text_extractor,
    )
    yield svc
    svc.shutdown()
