"""Deterministic regex detector for Indian identity numbers and phone numbers.

Processing flow:
1. Scan the text once per category, left to right; ``finditer`` yields
   non-overlapping, leftmost-first matches.
2. Mask every match independently.
3. Infer blur regions: an identity number implies a document that usually
   carries a holder photo, so a single default photo region is added. This is
   a stand-in for visual detection, not a located photo.
"""

from __future__ import annotations

import re
from typing import ClassVar

from app.detection.base import BaseDetector
from app.detection.masking import mask_national_id, mask_phone, mask_tax_id
from app.detection.models import (
    BlurRegion,
    BlurRegionKind,
    DetectionResult,
    PiiCategory,
    PiiMatch,
    Position,
)
from app.logging.logger import Log


class PatternDetector(BaseDetector):
    """Aadhaar, PAN and Indian phone number detector.

    Pure: no state is kept between calls, so running it twice over the same
    text returns equal results.
    """

    # ASCII digits only. 4-4-4 grouping, each separator optional and independent.
    _NATIONAL_ID_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b\d{4}[ \-]?\d{4}[ \-]?\d{4}\b",
        re.ASCII,
    )
    _TAX_ID_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b[A-Z]{5}\d{4}[A-Z]\b",
        re.ASCII,
    )
    # The lookbehind keeps "+91" from being split into a bare "91" prefix.
    _PHONE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"(?<![\w+])"
        r"(?P<prefix>\+?91[ \-]?)?"
        r"(?P<number>\d{10}|\d{5}[ \-]?\d{5})"
        r"\b",
        re.ASCII,
    )

    DEFAULT_PHOTO_REGION: ClassVar[Position] = Position(x=50, y=50, width=120, height=150)

    def detect(self, text: str) -> DetectionResult:
        if not text:
            return DetectionResult()

        national_ids = tuple(self._scan_national_ids(text))
        tax_ids = tuple(self._scan_tax_ids(text))
        phones = tuple(self._scan_phones(text))
        blur_regions = tuple(self._infer_blur_regions(national_ids, tax_ids))

        Log.debug(
            f"Detected {len(national_ids)} national ids, {len(tax_ids)} tax ids, "
            f"{len(phones)} phone numbers, {len(blur_regions)} blur regions"
        )
        return DetectionResult(
            national_id_numbers=national_ids,
            tax_id_numbers=tax_ids,
            phone_numbers=phones,
            blur_regions=blur_regions,
        )

    # ------------------------------------------------------------------
    # Scans
    # ------------------------------------------------------------------

    def _scan_national_ids(self, text: str) -> list[PiiMatch]:
        return [
            PiiMatch(
                category=PiiCategory.NATIONAL_ID_NUMBER,
                original=m.group(0),
                masked=mask_national_id(m.group(0)),
            )
            for m in self._NATIONAL_ID_RE.finditer(text)
        ]

    def _scan_tax_ids(self, text: str) -> list[PiiMatch]:
        return [
            PiiMatch(
                category=PiiCategory.TAX_ID_NUMBER,
                original=m.group(0),
                masked=mask_tax_id(m.group(0)),
            )
            for m in self._TAX_ID_RE.finditer(text)
        ]

    def _scan_phones(self, text: str) -> list[PiiMatch]:
        return [
            PiiMatch(
                category=PiiCategory.PHONE_NUMBER,
                original=m.group(0),
                masked=mask_phone(m.group("number"), m.group("prefix") or ""),
            )
            for m in self._PHONE_RE.finditer(text)
        ]

    # ------------------------------------------------------------------
    # Blur regions
    # ------------------------------------------------------------------

    def _infer_blur_regions(
        self,
        national_ids: tuple[PiiMatch, ...],
        tax_ids: tuple[PiiMatch, ...],
    ) -> list[BlurRegion]:
        if not national_ids and not tax_ids:
            return []
        return [BlurRegion(kind=BlurRegionKind.PHOTO, position=self.DEFAULT_PHOTO_REGION)]
