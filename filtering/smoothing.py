"""
Neighborhood-averaging (box) filter with clipped boundaries.

Each output pixel is the average of the input pixels in the square
kernel centred on it. Neighbors that fall outside the image are skipped,
not clamped to the edge and not wrapped, so border pixels are averaged
over fewer samples instead of being pulled toward phantom zero pixels.

The window sums are read from an integral image (summed-area table) of
int64 values. Sums and sample counts are integers, so the result is
bit-identical to visiting every kernel cell one by one.
"""

import logging

import numpy as np

from .buffer import PixelBuffer, as_buffer, clamp_channel, divide_round_half_away, is_integer
from .errors import InvalidKernelError

logger = logging.getLogger(__name__)


def validate_kernel_size(kernel_size: int) -> None:
    """Check that kernel_size is an odd integer >= 1.

    Raises:
        InvalidKernelError: If kernel_size is not an int, is < 1, or is even.
    """
    if not is_integer(kernel_size):
        raise InvalidKernelError(
            f"kernel_size must be an integer, got {type(kernel_size).__name__}"
        )
    if kernel_size < 1:
        raise InvalidKernelError(f"kernel_size must be >= 1, got {kernel_size}")
    if kernel_size % 2 == 0:
        raise InvalidKernelError(f"kernel_size must be odd, got {kernel_size}")


def _integral_image(pixels: np.ndarray) -> np.ndarray:
    """Summed-area table with a leading row and column of zeros."""
    height, width, channels = pixels.shape
    table = np.zeros((height + 1, width + 1, channels), dtype=np.int64)
    table[1:, 1:] = pixels.astype(np.int64).cumsum(axis=0).cumsum(axis=1)
    return table


def _window_bounds(length: int, offset: int) -> tuple[np.ndarray, np.ndarray]:
    """Half-open [start, stop) ranges of each window, clipped to the image."""
    centers = np.arange(length)
    start = np.clip(centers - offset, 0, length)
    stop = np.clip(centers + offset + 1, 0, length)
    return start, stop


def smooth(buffer: PixelBuffer, kernel_size: int) -> PixelBuffer:
    """Apply a kernel_size x kernel_size averaging filter.

    Every channel (alpha included) is averaged independently over the
    in-bounds samples of the window and rounded half away from zero.
    A kernel size of 1 returns a copy of the input.

    Args:
        buffer: Source pixel buffer.
        kernel_size: Odd integer >= 1.

    Returns:
        A new PixelBuffer with the same dimensions.

    Raises:
        InvalidKernelError: If kernel_size is even, < 1 or not an integer.
        InvalidBufferError: If buffer is not a well-formed pixel buffer.

    Examples:
        >>> src = PixelBuffer(1, 1, [10, 20, 30, 255])
        >>> smooth(src, 3) == src
        True
    """
    validate_kernel_size(kernel_size)
    buffer = as_buffer(buffer)
    logger.debug(
        "Applying %dx%d filter to %dx%d image",
        kernel_size, kernel_size, buffer.width, buffer.height,
    )

    if kernel_size == 1:
        return buffer.copy()

    offset = kernel_size // 2
    pixels = buffer.as_array()
    table = _integral_image(pixels)

    top, bottom = _window_bounds(buffer.height, offset)
    left, right = _window_bounds(buffer.width, offset)

    sums = (
        table[bottom][:, right]
        - table[top][:, right]
        - table[bottom][:, left]
        + table[top][:, left]
    )
    counts = ((bottom - top)[:, None] * (right - left)[None, :])[:, :, None]

    averaged = divide_round_half_away(sums, np.maximum(counts, 1))
    # Windows always hold the centre pixel; keep the source pixel if one ever doesn't
    result = np.where(counts > 0, clamp_channel(averaged), pixels)

    return PixelBuffer(buffer.width, buffer.height, result.reshape(-1))
