from pathlib import Path

from app.config.settings import Settings
from app.documents.exceptions import PayloadTooLargeError
from app.documents.models import ArtifactVariant, ContentKind, DocumentRecord
from app.documents.store import BaseDocumentStore, InMemoryDocumentStore
from app.extraction.base import BaseTextExtractor
from app.extraction.factory import TextExtractorFactory
from app.logging.logger import Log
from app.processor.processor import build_processor
from app.storage.base import BaseFileStorage
from app.storage.file_storage import LocalFileStorage
from app.worker.job_runner import JobRunner
from app.worker.worker import Worker


class DocumentService:
    """Entry points the transport layer calls: submit, poll, fetch, remove."""

    def __init__(
        self,
        store: BaseDocumentStore,
        file_storage: BaseFileStorage,
        worker: Worker,
        max_upload_bytes: int,
        text_extractor: BaseTextExtractor | None = None,
    ) -> None:
        self._store = store
        self._file_storage = file_storage
        self._worker = worker
        self._max_upload_bytes = max_upload_bytes
        self._text_extractor = text_extractor

    def submit(
        self,
        data: bytes,
        filename: str,
        content_type: str,
        size: int | None = None,
    ) -> DocumentRecord:
        """Accept an upload and schedule it; returns before processing runs.

        Raises:
            UnsupportedContentKindError: if the type is not PDF, JPEG or PNG.
            PayloadTooLargeError: if the upload exceeds ``max_upload_bytes``.
        """
        content_kind = ContentKind.from_mime(content_type)
        size_bytes = len(data) if size is None else size
        if size_bytes > self._max_upload_bytes:
            raise PayloadTooLargeError(
                f"Upload of {size_bytes} bytes exceeds the {self._max_upload_bytes} byte limit"
            )

        original_path = self._file_storage.save_original(filename, data)
        record = self._store.create(
            filename=filename,
            original_path=original_path,
            content_kind=content_kind,
            size_bytes=size_bytes,
        )
        try:
            self._worker.dispatch(record.id)
        except RuntimeError:
            self._store.delete(record.id)
            self._file_storage.delete(original_path)
            raise
        Log.info(
            f"Accepted document {record.id} ({content_kind.value}, {size_bytes} bytes)"
        )
        return record

    def get_status(self, document_id: str) -> DocumentRecord | None:
        return self._store.get(document_id)

    def get_artifact(self, document_id: str, variant: ArtifactVariant) -> bytes | None:
        """Original or redacted bytes; None while the variant is not available."""
        variant = ArtifactVariant(variant)
        record = self._store.get(document_id)
        if record is None:
            return None
        path = (
            record.redacted_path
            if variant is ArtifactVariant.REDACTED
            else record.original_path
        )
        if path is None:
            return None
        try:
            return self._file_storage.read(path)
        except FileNotFoundError:
            Log.warning(f"{variant.value} artifact for document {document_id} is missing at {path}")
            return None

    def remove(self, document_id: str) -> bool:
        """Delete a record and both of its artifacts. False for an unknown id."""
        record = self._store.pop(document_id)
        if record is None:
            return False
        # A run that completes after the pop finds no record and discards its own artifact.
        for path in (record.original_path, record.redacted_path):
            if path is not None:
                self._delete_artifact(document_id, path)
        Log.info(f"Removed document {document_id}")
        return True

    def shutdown(self) -> None:
        """Finish in-flight documents, then release the OCR engine."""
        self._worker.shutdown(wait=True)
        if self._text_extractor is not None:
            self._text_extractor.shutdown()

    def _delete_artifact(self, document_id: str, path: Path) -> None:
        try:
            self._file_storage.delete(path)
        except OSError as exc:
            Log.error(f"File cleanup error for document {document_id} at {path}: {exc}")


def build_document_service(settings: Settings) -> DocumentService:
    """Wire the store, storage, extractor, processor and worker pool."""
    store = InMemoryDocumentStore()
    file_storage = LocalFileStorage(files_root=settings.files_root)
    text_extractor = TextExtractorFactory.create(settings)
    processor = build_processor(settings, store, file_storage, text_extractor)
    worker = Worker(JobRunner(processor), settings)
    return DocumentService(
        store=store,
        file_storage=file_storage,
        worker=worker,
        max_upload_bytes=settings.max_upload_bytes,
        text_extractor=text_extractor,
    )
