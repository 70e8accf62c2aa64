from dataclasses import dataclass, field
from enum import Enum


class PiiCategory(str, Enum):
    NATIONAL_ID_NUMBER = "national_id_number"  # Aadhaar
    TAX_ID_NUMBER = "tax_id_number"  # PAN
    PHONE_NUMBER = "phone_number"


class BlurRegionKind(str, Enum):
    PHOTO = "photo"
    SIGNATURE = "signature"
    QR_CODE = "qr_code"


@dataclass(frozen=True)
class Position:
    """Axis-aligned rectangle, origin at the top-left corner."""

    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class PiiMatch:
    """Single detected sensitive value and its masked form."""

    category: PiiCategory
    original: str
    masked: str
    position: Position | None = None  # unknown for text-only detection


@dataclass(frozen=True)
class BlurRegion:
    kind: BlurRegionKind
    position: Position


@dataclass(frozen=True)
class DetectionResult:
    """All matches for one document, grouped by category, plus blur regions."""

    national_id_numbers: tuple[PiiMatch, ...] = field(default_factory=tuple)
    tax_id_numbers: tuple[PiiMatch, ...] = field(default_factory=tuple)
    phone_numbers: tuple[PiiMatch, ...] = field(default_factory=tuple)
    blur_regions: tuple[BlurRegion, ...] = field(default_factory=tuple)

    def matches_for(self, category: PiiCategory) -> tuple[PiiMatch, ...]:
        if category is PiiCategory.NATIONAL_ID_NUMBER:
            return self.national_id_numbers
        if category is PiiCategory.TAX_ID_NUMBER:
            return self.tax_id_numbers
        return self.phone_numbers

    @property
    def all_matches(self) -> tuple[PiiMatch, ...]:
        return self.national_id_numbers + self.tax_id_numbers + self.phone_numbers

    @property
    def total_matches(self) -> int:
        return len(self.all_matches)

    @property
    def is_empty(self) -> bool:
        return self.total_matches == 0 and not self.blur_regions
