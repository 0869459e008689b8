"""Pillow-based text watermarking."""

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont, ImageOps

from studio_gallery.services.delivery import WatermarkOptions, Watermarker

logger = logging.getLogger(__name__)

FALLBACK_FONT = "DejaVuSans.ttf"
ROTATION_DEGREES = 45


@dataclass
class PillowWatermarker(Watermarker):
    """Draws the watermark text diagonally across the centre of the image."""

    font_path: str | None = None
    quality: int = 80

    def apply(self, image_bytes: bytes, options: WatermarkOptions) -> bytes:
        """Return a JPEG with the text overlaid at the requested opacity."""
        with Image.open(io.BytesIO(image_bytes)) as source:
            base = ImageOps.exif_transpose(source).convert("RGBA")
        width, height = base.size

        overlay = Image.new("RGBA", base.size, (255, 255, 255, 0))
        draw = ImageDraw.Draw(overlay)
        font = self._font(options.font_size)
        left, top, right, bottom = draw.textbbox((0, 0), options.text, font=font)
        position = (
            (width - (right - left)) / 2 - left,
            (height - (bottom - top)) / 2 - top,
        )
        alpha = int(max(0.0, min(1.0, options.opacity)) * 255)
        draw.text(position, options.text, font=font, fill=(255, 255, 255, alpha))
        overlay = overlay.rotate(
            ROTATION_DEGREES,
            resample=Image.Resampling.BICUBIC,
            center=(width / 2, height / 2),
        )

        watermarked = Image.alpha_composite(base, overlay).convert("RGB")
        buffer = io.BytesIO()
        watermarked.save(buffer, format="JPEG", quality=self.quality)
        return buffer.getvalue()

    def _font(self, size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
        for candidate in (self.font_path, FALLBACK_FONT):
            if not candidate:
                continue
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                logger.info("Watermark font unavailable", extra={"font": candidate})
        return ImageFont.load_default(size=size)
