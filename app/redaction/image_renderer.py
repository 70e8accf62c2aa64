import io
from typing import ClassVar

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from app.detection.models import DetectionResult, Position
from app.logging.logger import Log
from app.redaction.base import BaseRedactionRenderer
from app.redaction.exceptions import RenderError


class ImageRedactionRenderer(BaseRedactionRenderer):
    """Composites opaque boxes over blur regions of a raster image with Pillow."""

    REGION_LABEL: ClassVar[str] = "[REDACTED]"
    WATERMARK_TEXT: ClassVar[str] = "REDACTED DOCUMENT"
    WATERMARK_ORIGIN: ClassVar[tuple[int, int]] = (20, 16)
    WATERMARK_COLOR: ClassVar[tuple[int, int, int]] = (220, 20, 20)

    def render(self, original_bytes: bytes, detection: DetectionResult) -> bytes:
        try:
            with Image.open(io.BytesIO(original_bytes)) as source:
                source.load()
                image_format = source.format or "PNG"
                image = source.convert("RGB")
        except (UnidentifiedImageError, OSError) as exc:
            raise RenderError(f"Failed to redact image document: {exc}") from exc

        try:
            draw = ImageDraw.Draw(image)
            font = ImageFont.load_default()
            for region in detection.blur_regions:
                self._draw_region(draw, font, image.size, region.position)
            draw.text(self.WATERMARK_ORIGIN, self.WATERMARK_TEXT, fill=self.WATERMARK_COLOR, font=font)

            out = io.BytesIO()
            image.save(out, format=image_format)
        except Exception as exc:
            raise RenderError(f"Failed to redact image document: {exc}") from exc

        Log.debug(
            f"Redacted {image.width}x{image.height} {image_format} image, "
            f"{len(detection.blur_regions)} regions"
        )
        return out.getvalue()

    @staticmethod
    def clamp(position: Position, image_size: tuple[int, int]) -> tuple[int, int, int, int]:
        """Box for *position* shifted so it never passes the right/bottom edge.

        Returns (left, top, right, bottom) with exclusive right/bottom.
        """
        image_width, image_height = image_size
        left = max(0, min(position.x, image_width - position.width))
        top = max(0, min(position.y, image_height - position.height))
        return left, top, left + position.width, top + position.height

    def _draw_region(
        self,
        draw: ImageDraw.ImageDraw,
        font: ImageFont.ImageFont | ImageFont.FreeTypeFont,
        image_size: tuple[int, int],
        position: Position,
    ) -> None:
        left, top, right, bottom = self.clamp(position, image_size)
        draw.rectangle((left, top, right - 1, bottom - 1), fill=(0, 0, 0))
        text_left, text_top, text_right, text_bottom = draw.textbbox((0, 0), self.REGION_LABEL, font=font)
        center_x = left + (right - left - (text_right - text_left)) // 2
        center_y = top + (bottom - top - (text_bottom - text_top)) // 2
        draw.text((center_x, center_y), self.REGION_LABEL, fill=(255, 255, 255), font=font)
