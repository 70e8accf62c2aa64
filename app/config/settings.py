from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    files_root: Path = Path("uploads")
    max_upload_bytes: int = 10 * 1024 * 1024

    pdf_engine: str = "pdfplumber"
    pdf_ocr_enabled: bool = True
    pdf_render_dpi: int = 300
    pdf_locate_text: bool = False

    ocr_engine: str = "tesseract"
    ocr_language: str = "eng"
    tesseract_cmd: str = ""
    ocr_max_concurrency: int = 1

    worker_count: int = 4
    status_poll_interval_seconds: float = 0.5
