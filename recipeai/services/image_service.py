"""Image processing service."""

import base64
import binascii
import io
import logging
import re
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from recipeai.config import settings
from recipeai.utils.exceptions import ImageProcessingError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_MIME = {"image/jpeg", "image/png", "image/webp"}

# Resize/compress before sending to Gemini; phone photos are far larger than needed
VISION_MAX_DIM = 1400
JPEG_QUALITY = 78

_DATA_URI_PREFIX = re.compile(r"^data:image/[a-zA-Z0-9.+-]+;base64,")


class ImageService:
    """Service for processing uploaded or captured food photos."""

    @staticmethod
    def decode_base64_image(image_base64: str) -> bytes:
        """
        Decode a camera/upload capture sent as base64.

        Accepts raw base64 or a ``data:image/...;base64,`` URI.

        Raises:
            ImageProcessingError: If the payload is not valid base64
        """
        payload = _DATA_URI_PREFIX.sub("", (image_base64 or "").strip())
        try:
            return base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageProcessingError(f"Image is not valid base64: {str(e)}") from e

    @staticmethod
    def validate_image(file_content: bytes) -> Tuple[bytes, str]:
        """
        Validate an uploaded image.

        Args:
            file_content: Image file bytes

        Returns:
            Tuple of (image_bytes, mime_type)

        Raises:
            ImageProcessingError: If image is invalid
        """
        if not file_content:
            raise ImageProcessingError("Image file is empty")

        max_size = settings.max_request_size
        if len(file_content) > max_size:
            raise ImageProcessingError(f"Image file too large (max {max_size / 1024 / 1024}MB)")

        mime_type = ImageService._detect_mime_type(file_content)

        if mime_type not in ALLOWED_IMAGE_MIME:
            raise ImageProcessingError(
                f"Unsupported image format: {mime_type}. Supported: JPEG, PNG, WebP"
            )

        return file_content, mime_type

    @staticmethod
    def _detect_mime_type(file_content: bytes) -> str:
        """Detect MIME type from file content (magic bytes)."""
        if file_content.startswith(b"\xff\xd8\xff"):
            return "image/jpeg"
        elif file_content.startswith(b"\x89PNG\r\n\x1a\n"):
            return "image/png"
        elif file_content.startswith(b"RIFF") and b"WEBP" in file_content[:12]:
            return "image/webp"
        return "application/octet-stream"

    @staticmethod
    def optimize_for_vision(image_bytes: bytes, mime_type: Optional[str]) -> Tuple[bytes, str]:
        """
        Downscale + compress large images to reduce Gemini latency.

        Returns: (new_bytes, new_mime). Small images and images Pillow cannot
        read are returned unchanged.
        """
        if len(image_bytes) < 350_000:
            return image_bytes, mime_type or "image/jpeg"

        try:
            with Image.open(io.BytesIO(image_bytes)) as im:
                # Normalize to RGB; if alpha exists, composite onto white
                if im.mode in ("RGBA", "LA") or (im.mode == "P" and "transparency" in im.info):
                    bg = Image.new("RGBA", im.size, (255, 255, 255, 255))
                    im = Image.alpha_composite(bg, im.convert("RGBA")).convert("RGB")
                else:
                    im = im.convert("RGB")

                w, h = im.size
                max_side = max(w, h)
                if max_side > VISION_MAX_DIM:
                    scale = VISION_MAX_DIM / float(max_side)
                    im = im.resize((max(1, int(w * scale)), max(1, int(h * scale))), Image.LANCZOS)

                out = io.BytesIO()
                im.save(out, format="JPEG", quality=JPEG_QUALITY, optimize=True)
                return out.getvalue(), "image/jpeg"

        except (UnidentifiedImageError, OSError) as e:
            logger.warning(f"Image resize/compress skipped: {e}")
            return image_bytes, mime_type or "image/jpeg"
