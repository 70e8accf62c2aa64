from abc import ABC, abstractmethod
from pathlib import Path


class BaseFileStorage(ABC):
    """Path-addressed storage for original and redacted document bytes."""

    @abstractmethod
    def save_original(self, filename: str, data: bytes) -> Path:
        """Persist uploaded bytes and return their path."""

    @abstractmethod
    def save_redacted(self, original_path: Path, data: bytes) -> Path:
        """Persist redacted bytes derived from *original_path* and return their path."""

    @abstractmethod
    def read(self, path: Path) -> bytes:
        """Return stored bytes.

        Raises:
            FileNotFoundError: if nothing is stored at *path*.
        """

    @abstractmethod
    def delete(self, path: Path) -> bool:
        """Remove stored bytes. Returns False if nothing was stored at *path*."""
