from app.config.settings import Settings
from app.detection.models import DetectionResult
from app.documents.models import ContentKind
from app.redaction.base import BaseRedactionRenderer
from app.redaction.exceptions import RenderError
from app.redaction.image_renderer import ImageRedactionRenderer
from app.redaction.pdf_renderer import PdfRedactionRenderer


class RedactionRenderer:
    """Selects the paged or raster strategy by content kind."""

    def __init__(self, renderers: dict[ContentKind, BaseRedactionRenderer]) -> None:
        self._renderers = renderers

    def render(
        self,
        original_bytes: bytes,
        content_kind: ContentKind,
        detection: DetectionResult,
    ) -> bytes:
        """Render a redacted derivative of the original document.

        Raises:
            RenderError: for unsupported kinds or any strategy failure.
        """
        renderer = self._renderers.get(content_kind)
        if renderer is None:
            raise RenderError(f"No redaction renderer for content kind '{content_kind}'")
        return renderer.render(original_bytes, detection)


class RedactionRendererFactory:
    """Creates the renderer dispatcher from settings."""

    @classmethod
    def create(cls, settings: Settings) -> RedactionRenderer:
        raster = ImageRedactionRenderer()
        return RedactionRenderer(
            {
                ContentKind.PDF: PdfRedactionRenderer(locate_text=settings.pdf_locate_text),
                ContentKind.JPEG: raster,
                ContentKind.PNG: raster,
            }
        )
