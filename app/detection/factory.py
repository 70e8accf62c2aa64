from app.config.settings import Settings
from app.detection.base import BaseDetector
from app.detection.detector import PatternDetector


class DetectorFactory:
    """Creates the configured sensitive-data detector."""

    @classmethod
    def create(cls, settings: Settings) -> BaseDetector:
        _ = settings  # reserved for future configuration
        return PatternDetector()
