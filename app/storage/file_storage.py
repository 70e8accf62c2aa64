import re
import uuid
from pathlib import Path

from app.storage.base import BaseFileStorage

_UNSAFE_CHARS_RE = re.compile(r"[^a-zA-Z0-9._-]")
_LEADING_PUNCT_RE = re.compile(r"^[._-]+")
MAX_FILENAME_LENGTH = 100


def sanitize_filename(filename: str) -> str:
    """Strip path traversal and unsafe characters from a client filename."""
    cleaned = _UNSAFE_CHARS_RE.sub("_", filename)
    cleaned = cleaned.replace("..", "_")
    cleaned = _LEADING_PUNCT_RE.sub("", cleaned)
    return cleaned[:MAX_FILENAME_LENGTH] or "document"


class LocalFileStorage(BaseFileStorage):
    """Stores files under ``{files_root}/originals`` and ``{files_root}/redacted``."""

    FILES_ROOT = Path("uploads")

    def __init__(self, files_root: Path | None = None) -> None:
        self._files_root = files_root if files_root is not None else self.FILES_ROOT

    @property
    def originals_dir(self) -> Path:
        return self._files_root / "originals"

    @property
    def redacted_dir(self) -> Path:
        return self._files_root / "redacted"

    def save_original(self, filename: str, data: bytes) -> Path:
        path = self.originals_dir / f"{uuid.uuid4().hex}_{sanitize_filename(filename)}"
        return self._write(path, data)

    def save_redacted(self, original_path: Path, data: bytes) -> Path:
        path = self.redacted_dir / f"redacted_{sanitize_filename(original_path.name)}"
        return self._write(path, data)

    def read(self, path: Path) -> bytes:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return path.read_bytes()

    def delete(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True

    def _write(self, path: Path, data: bytes) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path
