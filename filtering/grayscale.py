"""
Luminance-based grayscale conversion.

Pure function: returns a new buffer without modifying the input.
"""

import logging

import numpy as np

from config import LUMA_WEIGHTS
from .buffer import PixelBuffer, as_buffer, clamp_channel, divide_round_half_away

logger = logging.getLogger(__name__)

# Weights scaled to integers so the weighted sum is exact: Y = (299R + 587G + 114B) / 1000
_LUMA_SCALE = 1000
_LUMA_WEIGHTS_SCALED = np.array(
    [round(w * _LUMA_SCALE) for w in LUMA_WEIGHTS], dtype=np.int64
)


def grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """Convert an RGBA buffer to grayscale.

    Each pixel's R, G and B channels are replaced by its luma
    Y = round(0.299 R + 0.587 G + 0.114 B), rounded half away from zero
    and clamped to [0, 255]. Alpha is copied unchanged.

    Args:
        buffer: Source pixel buffer.

    Returns:
        A new PixelBuffer with the same dimensions.

    Raises:
        InvalidBufferError: If buffer is not a well-formed pixel buffer.

    Examples:
        >>> src = PixelBuffer(1, 1, [200, 100, 50, 255])
        >>> grayscale(src).pixel(0, 0)
        (124, 124, 124, 255)
    """
    buffer = as_buffer(buffer)
    logger.debug("Converting %dx%d image to grayscale", buffer.width, buffer.height)

    pixels = buffer.data.reshape(-1, 4)
    weighted = pixels[:, :3].astype(np.int64) @ _LUMA_WEIGHTS_SCALED
    luma = clamp_channel(divide_round_half_away(weighted, _LUMA_SCALE))

    out = np.empty_like(pixels)
    out[:, 0] = luma
    out[:, 1] = luma
    out[:, 2] = luma
    out[:, 3] = pixels[:, 3]

    return PixelBuffer(buffer.width, buffer.height, out.reshape(-1))
