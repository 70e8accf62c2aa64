from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from app.detection.models import DetectionResult
from app.documents.exceptions import UnsupportedContentKindError


class ProcessingStage(str, Enum):
    """Pipeline stages in their required order, plus the terminal error state."""

    PENDING = "pending"
    OCR = "ocr"
    DETECTION = "detection"
    REDACTION = "redaction"
    COMPLETE = "complete"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (ProcessingStage.COMPLETE, ProcessingStage.ERROR)

    def can_transition_to(self, target: "ProcessingStage") -> bool:
        """Only forward-adjacent moves, or any non-terminal stage into error."""
        if self.is_terminal:
            return False
        if target is ProcessingStage.ERROR:
            return True
        return _NEXT_STAGE.get(self) is target


_NEXT_STAGE: dict[ProcessingStage, ProcessingStage] = {
    ProcessingStage.PENDING: ProcessingStage.OCR,
    ProcessingStage.OCR: ProcessingStage.DETECTION,
    ProcessingStage.DETECTION: ProcessingStage.REDACTION,
    ProcessingStage.REDACTION: ProcessingStage.COMPLETE,
}


class ContentKind(str, Enum):
    """Accepted upload content types."""

    PDF = "application/pdf"
    JPEG = "image/jpeg"
    PNG = "image/png"

    @property
    def is_paged(self) -> bool:
        return self is ContentKind.PDF

    @classmethod
    def from_mime(cls, mime_type: str) -> "ContentKind":
        """Resolve a MIME type, accepting the common ``image/jpg`` alias.

        Raises:
            UnsupportedContentKindError: for anything outside PDF, JPEG and PNG.
        """
        normalized = (mime_type or "").split(";", 1)[0].strip().lower()
        if normalized == "image/jpg":
            normalized = cls.JPEG.value
        try:
            return cls(normalized)
        except ValueError:
            raise UnsupportedContentKindError(
                f"Unsupported content type '{mime_type}'. "
                f"Only PDF, JPG, and PNG files are allowed."
            ) from None


class ArtifactVariant(str, Enum):
    ORIGINAL = "original"
    REDACTED = "redacted"


@dataclass(frozen=True)
class DocumentRecord:
    """Authoritative state of one submitted document.

    Instances are never mutated; the store swaps in a new snapshot on every
    update so readers cannot observe a half-written record.
    """

    id: str
    filename: str
    original_path: Path
    content_kind: ContentKind
    size_bytes: int
    created_at: datetime
    updated_at: datetime
    stage: ProcessingStage = ProcessingStage.PENDING
    progress: int = 0
    status_message: str = "Waiting to start processing"
    error: str | None = None
    redacted_path: Path | None = None
    detection_result: DetectionResult | None = None
