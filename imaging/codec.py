"""Decode image files into pixel buffers and encode them back.

The filtering core never sees file formats; everything it receives has
already been decoded to RGBA here.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from filtering import PixelBuffer

logger = logging.getLogger(__name__)

# Pillow formats that cannot store an alpha channel
_NO_ALPHA_FORMATS = {"JPEG", "BMP"}


class ImageDecodeError(ValueError):
    """Raised when image bytes cannot be decoded."""


def decode_image(data: bytes) -> PixelBuffer:
    """Decode encoded image bytes (PNG, JPEG, GIF, ...) into an RGBA buffer.

    Animated images contribute their first frame only.

    Raises:
        ImageDecodeError: If the bytes are not a readable image.
    """
    if not data:
        raise ImageDecodeError("No image data provided")
    try:
        with Image.open(io.BytesIO(data)) as img:
            rgba = img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Failed to decode image: {e}") from e

    logger.debug("Decoded %dx%d image", rgba.width, rgba.height)
    return PixelBuffer.from_array(np.asarray(rgba))


def load_image(path: str | Path) -> PixelBuffer:
    """Load an image file from disk into an RGBA buffer."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Image not found: {path}")
    try:
        return decode_image(path.read_bytes())
    except ImageDecodeError as e:
        raise ImageDecodeError(f"{path}: {e}") from e


def to_pil_image(buffer: PixelBuffer) -> Image.Image:
    """Wrap a buffer as a Pillow RGBA image (copies the data)."""
    # (H, W, 4) uint8 is inferred as RGBA
    return Image.fromarray(buffer.as_array().copy())


def encode_png(buffer: PixelBuffer) -> bytes:
    """Encode a buffer as PNG bytes, alpha included."""
    out = io.BytesIO()
    to_pil_image(buffer).save(out, format="PNG")
    return out.getvalue()


def save_image(buffer: PixelBuffer, path: str | Path) -> Path:
    """Save a buffer to disk. The format follows the file suffix.

    Formats without alpha support (JPEG, BMP) are written as RGB.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    img = to_pil_image(buffer)
    fmt = Image.registered_extensions().get(path.suffix.lower())
    if fmt is None:
        raise ValueError(f"Unsupported output format: {path.suffix or '(none)'}")
    if fmt in _NO_ALPHA_FORMATS:
        img = img.convert("RGB")

    img.save(path, format=fmt)
    logger.debug("Saved %dx%d image to %s", buffer.width, buffer.height, path)
    return path
