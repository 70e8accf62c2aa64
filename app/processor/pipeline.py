from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from app.detection.models import DetectionResult
from app.documents.models import DocumentRecord


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    record: DocumentRecord | None = None
    raw_bytes: bytes = b""
    extracted_text: str = ""
    detection_result: DetectionResult | None = None
    redacted_path: Path | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError


def require_record(context: PipelineContext) -> DocumentRecord:
    if context.record is None:
        raise ValueError("PipelineContext.record must be set before this step")
    return context.record
