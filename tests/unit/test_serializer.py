import json
from datetime import datetime, timezone
from pathlib import Path

from app.detection.detector import PatternDetector
from app.detection.models import DetectionResult
from app.documents.models import ContentKind, DocumentRecord, ProcessingStage
from app.documents.serializer import DocumentSerializer

NOW = datetime(2026, 1, 15, 10, 30, tzinfo=timezone.utc)


def _make_record(**overrides: object) -> DocumentRecord:
    fields: dict[str, object] = {
        "id": "doc-1",
        "filename": "card.png",
        "original_path": Path("/files/originals/abc_card.png"),
        "content_kind": ContentKind.PNG,
        "size_bytes": 2048,
        "created_at": NOW,
        "updated_at": NOW,
    }
    fields.update(overrides)
    return DocumentRecord(**fields)  # type: ignore[arg-type]


class TestDocumentSerializer:
    def test_pending_record(self) -> None:
        data = DocumentSerializer().serialize(_make_record())
        assert data["id"] == "doc-1"
        assert data["stage"] == "pending"
        assert data["progress"] == 0
        assert data["content_kind"] == "image/png"
        assert data["status_message"] == "Waiting to start processing"
        assert data["redacted_path"] is None
        assert data["detection_result"] is None
        assert data["created_at"] == "2026-01-15T10:30:00+00:00"

    def test_complete_record_is_json_serializable(self) -> None:
        detection = PatternDetector().detect(
            "Aadhaar 1234 5678 9012, PAN ABCDE1234F, Phone +91 9876543210"
        )
        record = _make_record(
            stage=ProcessingStage.COMPLETE,
            progress=100,
            redacted_path=Path("/files/redacted/redacted_abc_card.png"),
            detection_result=detection,
        )
        data = json.loads(json.dumps(DocumentSerializer().serialize(record)))

        assert data["redacted_path"] == "/files/redacted/redacted_abc_card.png"
        result = data["detection_result"]
        assert result["national_id_numbers"] == [
            {"original": "1234 5678 9012", "masked": "XXXX XXXX 9012", "position": None}
        ]
        assert result["tax_id_numbers"][0]["masked"] == "XXXXX234F"
        assert result["phone_numbers"][0]["masked"] == "+91 XXXXX3210"
        assert result["blur_regions"] == [
            {"type": "photo", "position": {"x": 50, "y": 50, "width": 120, "height": 150}}
        ]

    def test_failed_record_carries_error(self) -> None:
        record = _make_record(
            stage=ProcessingStage.ERROR,
            status_message="Processing failed",
            error="Text extraction failed: unreadable",
        )
        data = DocumentSerializer().serialize(record)
        assert data["stage"] == "error"
        assert data["error"] == "Text extraction failed: unreadable"

    def test_empty_detection_lists_every_category(self) -> None:
        payload = DocumentSerializer().serialize_detection(DetectionResult())
        assert payload == {
            "national_id_numbers": [],
            "tax_id_numbers": [],
            "phone_numbers": [],
            "blur_regions": [],
        }
