from app.config.settings import Settings
from app.detection.base import BaseDetector
from app.detection.factory import DetectorFactory
from app.documents.models import ProcessingStage
from app.documents.store import BaseDocumentStore
from app.extraction.base import BaseTextExtractor
from app.extraction.exceptions import ExtractionError
from app.logging.logger import Log
from app.processor.exceptions import DocumentNotFoundError
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    AdvanceStageStep,
    DetectSensitiveDataStep,
    ExtractTextStep,
    LoadDocumentStep,
    MarkCompleteStep,
    MarkFailedStep,
    RenderRedactionStep,
)
from app.redaction.exceptions import RenderError
from app.redaction.renderer import RedactionRenderer, RedactionRendererFactory
from app.storage.base import BaseFileStorage


class Processor:
    """Drives one document through the redaction pipeline.

    Pipeline: ocr -> load -> extract -> detection -> detect -> redaction ->
    render -> complete. Any failure runs ``failed_step`` once and re-raises;
    a record that disappears mid-run stops the pipeline without a failure
    write. Nothing is retried.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, document_id: str) -> PipelineContext:
        Log.info(f"Processing document {document_id}")
        context = PipelineContext(document_id=document_id)
        try:
            for step in self._steps:
                context = step.run(context)
        except DocumentNotFoundError:
            raise
        except Exception as exc:
            context.error_message = describe_failure(exc)
            self._failed_step.run(context)
            raise
        return context


def describe_failure(exc: Exception) -> str:
    """Human-readable cause that tells extraction and rendering failures apart."""
    if isinstance(exc, ExtractionError):
        return f"Text extraction failed: {exc}"
    if isinstance(exc, RenderError):
        return f"Redaction failed: {exc}"
    return f"Processing failed: {exc}"


def build_steps(
    store: BaseDocumentStore,
    file_storage: BaseFileStorage,
    text_extractor: BaseTextExtractor,
    detector: BaseDetector,
    renderer: RedactionRenderer,
) -> list[PipelineStep]:
    return [
        AdvanceStageStep(store, ProcessingStage.OCR, 25, "Extracting text from document..."),
        LoadDocumentStep(file_storage),
        ExtractTextStep(text_extractor),
        AdvanceStageStep(
            store, ProcessingStage.DETECTION, 50, "Detecting sensitive information..."
        ),
        DetectSensitiveDataStep(detector),
        AdvanceStageStep(
            store, ProcessingStage.REDACTION, 75, "Redacting sensitive information..."
        ),
        RenderRedactionStep(renderer, file_storage),
        MarkCompleteStep(store, file_storage),
    ]


def build_processor(
    settings: Settings,
    store: BaseDocumentStore,
    file_storage: BaseFileStorage,
    text_extractor: BaseTextExtractor,
) -> Processor:
    """Build a Processor with all required adapters."""
    steps = build_steps(
        store=store,
        file_storage=file_storage,
        text_extractor=text_extractor,
        detector=DetectorFactory.create(settings),
        renderer=RedactionRendererFactory.create(settings),
    )
    return Processor(steps=steps, failed_step=MarkFailedStep(store))
