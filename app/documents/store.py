import threading
import uuid
from abc import ABC, abstractmethod
from dataclasses import fields, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from app.detection.models import DetectionResult
from app.documents.exceptions import (
    DetectionResultAlreadySetError,
    DocumentStoreError,
    InvalidStageTransitionError,
)
from app.documents.models import ContentKind, DocumentRecord, ProcessingStage

_MANAGED_FIELDS = frozenset({"id", "created_at", "updated_at"})
_RECORD_FIELDS = frozenset(f.name for f in fields(DocumentRecord))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseDocumentStore(ABC):
    """Source of truth for document records.

    Every operation is atomic with respect to a single record. Lookups of an
    unknown id return ``None`` (or ``False`` for delete) instead of raising.
    """

    @abstractmethod
    def create(
        self,
        filename: str,
        original_path: Path,
        content_kind: ContentKind,
        size_bytes: int,
    ) -> DocumentRecord:
        """Create a record in stage ``pending`` with a fresh unique id."""

    @abstractmethod
    def get(self, document_id: str) -> DocumentRecord | None:
        """Latest committed snapshot of a record."""

    @abstractmethod
    def update(self, document_id: str, **changes: Any) -> DocumentRecord | None:
        """Apply *changes* as one atomic write.

        Raises:
            InvalidStageTransitionError: if ``stage`` moves illegally.
            DetectionResultAlreadySetError: if a result is already attached.
            DocumentStoreError: on unknown or immutable fields, or if the
                redacted path or detection result would be set outside
                stage ``complete``.
        """

    @abstractmethod
    def pop(self, document_id: str) -> DocumentRecord | None:
        """Remove a record and return its last snapshot. None for an unknown id."""

    @abstractmethod
    def list_records(self) -> list[DocumentRecord]:
        """Snapshots of all records, oldest first."""

    def set_stage(
        self,
        document_id: str,
        stage: ProcessingStage,
        progress: int | None = None,
        status_message: str | None = None,
    ) -> DocumentRecord | None:
        changes: dict[str, Any] = {"stage": stage}
        if progress is not None:
            changes["progress"] = progress
        if status_message is not None:
            changes["status_message"] = status_message
        return self.update(document_id, **changes)

    def delete(self, document_id: str) -> bool:
        """Remove a record. Returns False for an unknown id."""
        return self.pop(document_id) is not None

    def mark_complete(
        self,
        document_id: str,
        redacted_path: Path,
        detection_result: DetectionResult,
        status_message: str = "Document processing complete",
    ) -> DocumentRecord | None:
        """Commit the artifact, the detection result and ``complete`` in one write."""
        return self.update(
            document_id,
            stage=ProcessingStage.COMPLETE,
            progress=100,
            status_message=status_message,
            redacted_path=redacted_path,
            detection_result=detection_result,
        )


class InMemoryDocumentStore(BaseDocumentStore):
    """Volatile, process-local store; all records are lost on restart.

    Records are frozen dataclasses replaced wholesale under a lock, so a
    reader holding a snapshot never sees a partially applied update.
    """

    def __init__(self) -> None:
        self._records: dict[str, DocumentRecord] = {}
        self._lock = threading.Lock()

    def create(
        self,
        filename: str,
        original_path: Path,
        content_kind: ContentKind,
        size_bytes: int,
    ) -> DocumentRecord:
        now = _utcnow()
        with self._lock:
            document_id = str(uuid.uuid4())
            while document_id in self._records:
                document_id = str(uuid.uuid4())
            record = DocumentRecord(
                id=document_id,
                filename=filename,
                original_path=original_path,
                content_kind=content_kind,
                size_bytes=size_bytes,
                created_at=now,
                updated_at=now,
            )
            self._records[document_id] = record
        return record

    def get(self, document_id: str) -> DocumentRecord | None:
        with self._lock:
            return self._records.get(document_id)

    def update(self, document_id: str, **changes: Any) -> DocumentRecord | None:
        with self._lock:
            current = self._records.get(document_id)
            if current is None:
                return None
            updated = self._apply(current, changes)
            self._records[document_id] = updated
            return updated

    def pop(self, document_id: str) -> DocumentRecord | None:
        with self._lock:
            return self._records.pop(document_id, None)

    def list_records(self) -> list[DocumentRecord]:
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=lambda r: r.created_at)

    def _apply(self, current: DocumentRecord, changes: dict[str, Any]) -> DocumentRecord:
        unknown = set(changes) - _RECORD_FIELDS
        if unknown:
            raise DocumentStoreError(f"Unknown document fields: {sorted(unknown)}")
        managed = set(changes) & _MANAGED_FIELDS
        if managed:
            raise DocumentStoreError(f"Document fields are managed by the store: {sorted(managed)}")

        new_stage = ProcessingStage(changes.get("stage", current.stage))
        changes = {**changes, "stage": new_stage}
        if new_stage is not current.stage and not current.stage.can_transition_to(new_stage):
            raise InvalidStageTransitionError(
                f"Document {current.id}: cannot move from '{current.stage.value}' "
                f"to '{new_stage.value}'"
            )
        if changes.get("detection_result") is not None and current.detection_result is not None:
            raise DetectionResultAlreadySetError(
                f"Document {current.id} already has a detection result"
            )
        if changes.get("detection_result") is not None and new_stage is not ProcessingStage.COMPLETE:
            raise DocumentStoreError(
                f"Document {current.id}: detection_result can only be attached "
                f"together with stage 'complete'"
            )

        updated = replace(current, **changes, updated_at=_utcnow())
        if (updated.redacted_path is not None) != (updated.stage is ProcessingStage.COMPLETE):
            raise DocumentStoreError(
                f"Document {current.id}: redacted_path must be set exactly when "
                f"stage is 'complete'"
            )
        return updated
