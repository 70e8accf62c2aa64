from typing import Any

from app.detection.models import BlurRegion, DetectionResult, PiiCategory, PiiMatch, Position
from app.documents.models import DocumentRecord


_CATEGORY_KEYS: dict[PiiCategory, str] = {
    PiiCategory.NATIONAL_ID_NUMBER: "national_id_numbers",
    PiiCategory.TAX_ID_NUMBER: "tax_id_numbers",
    PiiCategory.PHONE_NUMBER: "phone_numbers",
}


class DocumentSerializer:
    """Converts records and detection results to JSON-serializable dicts."""

    def serialize(self, record: DocumentRecord) -> dict[str, Any]:
        return {
            "id": record.id,
            "filename": record.filename,
            "content_kind": record.content_kind.value,
            "size_bytes": record.size_bytes,
            "stage": record.stage.value,
            "progress": record.progress,
            "status_message": record.status_message,
            "error": record.error,
            "original_path": str(record.original_path),
            "redacted_path": str(record.redacted_path) if record.redacted_path else None,
            "detection_result": (
                self.serialize_detection(record.detection_result)
                if record.detection_result is not None
                else None
            ),
            "created_at": record.created_at.isoformat(),
            "updated_at": record.updated_at.isoformat(),
        }

    def serialize_detection(self, result: DetectionResult) -> dict[str, list[dict[str, Any]]]:
        """Group matches by category, the shape a polling client renders."""
        payload: dict[str, list[dict[str, Any]]] = {
            key: [self._match_to_dict(m) for m in result.matches_for(category)]
            for category, key in _CATEGORY_KEYS.items()
        }
        payload["blur_regions"] = [self._region_to_dict(r) for r in result.blur_regions]
        return payload

    def _match_to_dict(self, match: PiiMatch) -> dict[str, Any]:
        return {
            "original": match.original,
            "masked": match.masked,
            "position": self._position_to_dict(match.position) if match.position else None,
        }

    def _region_to_dict(self, region: BlurRegion) -> dict[str, Any]:
        return {"type": region.kind.value, "position": self._position_to_dict(region.position)}

    def _position_to_dict(self, position: Position) -> dict[str, int]:
        return {
            "x": position.x,
            "y": position.y,
            "width": position.width,
            "height": position.height,
        }
