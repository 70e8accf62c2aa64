from app.detection.base import BaseDetector
from app.documents.models import ProcessingStage
from app.documents.store import BaseDocumentStore
from app.extraction.base import BaseTextExtractor
from app.extraction.exceptions import ExtractionError
from app.logging.logger import Log
from app.processor.exceptions import DocumentNotFoundError
from app.processor.pipeline import PipelineContext, PipelineStep, require_record
from app.redaction.exceptions import RenderError
from app.redaction.renderer import RedactionRenderer
from app.storage.base import BaseFileStorage


class AdvanceStageStep(PipelineStep):
    def __init__(
        self,
        store: BaseDocumentStore,
        stage: ProcessingStage,
        progress: int,
        message: str,
    ) -> None:
        self._store = store
        self._stage = stage
        self._progress = progress
        self._message = message

    def run(self, context: PipelineContext) -> PipelineContext:
        record = self._store.set_stage(
            context.document_id,
            self._stage,
            progress=self._progress,
            status_message=self._message,
        )
        if record is None:
            raise DocumentNotFoundError(f"Document {context.document_id} not found")
        context.record = record
        Log.info(f"Document {context.document_id} entered stage '{self._stage.value}'")
        return context


class LoadDocumentStep(PipelineStep):
    def __init__(self, file_storage: BaseFileStorage) -> None:
        self._file_storage = file_storage

    def run(self, context: PipelineContext) -> PipelineContext:
        record = require_record(context)
        try:
            context.raw_bytes = self._file_storage.read(record.original_path)
        except OSError as exc:
            raise ExtractionError(f"Could not read original document: {exc}") from exc
        Log.info(f"Loaded {len(context.raw_bytes)} bytes for document {context.document_id}")
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, text_extractor: BaseTextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        record = require_record(context)
        context.extracted_text = self._text_extractor.extract(
            context.raw_bytes, record.content_kind
        )
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from document {context.document_id}"
        )
        return context


class DetectSensitiveDataStep(PipelineStep):
    def __init__(self, detector: BaseDetector) -> None:
        self._detector = detector

    def run(self, context: PipelineContext) -> PipelineContext:
        context.detection_result = self._detector.detect(context.extracted_text)
        Log.info(
            f"Detected {context.detection_result.total_matches} sensitive values and "
            f"{len(context.detection_result.blur_regions)} blur regions in document "
            f"{context.document_id}"
        )
        return context


class RenderRedactionStep(PipelineStep):
    def __init__(self, renderer: RedactionRenderer, file_storage: BaseFileStorage) -> None:
        self._renderer = renderer
        self._file_storage = file_storage

    def run(self, context: PipelineContext) -> PipelineContext:
        record = require_record(context)
        if context.detection_result is None:
            raise ValueError("PipelineContext.detection_result must be set before rendering")
        redacted = self._renderer.render(
            context.raw_bytes, record.content_kind, context.detection_result
        )
        try:
            context.redacted_path = self._file_storage.save_redacted(
                record.original_path, redacted
            )
        except OSError as exc:
            raise RenderError(f"Could not write redacted document: {exc}") from exc
        Log.info(f"Wrote {len(redacted)} redacted bytes for document {context.document_id}")
        return context


class MarkCompleteStep(PipelineStep):
    """Commits the redacted path, detection result and ``complete`` in one update."""

    def __init__(self, store: BaseDocumentStore, file_storage: BaseFileStorage) -> None:
        self._store = store
        self._file_storage = file_storage

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.redacted_path is None or context.detection_result is None:
            raise ValueError("PipelineContext must hold redaction output before completion")
        record = self._store.mark_complete(
            context.document_id,
            redacted_path=context.redacted_path,
            detection_result=context.detection_result,
        )
        if record is None:
            # Deleted mid-run: nothing references the artifact any more.
            self._file_storage.delete(context.redacted_path)
            raise DocumentNotFoundError(f"Document {context.document_id} not found")
        context.record = record
        Log.info(f"Document {context.document_id} marked as complete")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, store: BaseDocumentStore) -> None:
        self._store = store

    def run(self, context: PipelineContext) -> PipelineContext:
        record = self._store.update(
            context.document_id,
            stage=ProcessingStage.ERROR,
            progress=0,
            status_message="Processing failed",
            error=context.error_message,
        )
        if record is None:
            Log.warning(f"Document {context.document_id} vanished before it could be marked failed")
            return context
        context.record = record
        Log.error(f"Document {context.document_id} marked as failed: {context.error_message}")
        return context
