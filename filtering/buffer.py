"""
Pixel buffer value type and the numeric helpers shared by all filters.

A PixelBuffer is a flat, row-major sequence of RGBA channel values
(uint8) together with its width and height. Buffers own a private,
read-only copy of their data, so a transformation can never alter the
buffer it was given.

Rounding and clamping are explicit, named operations:
- round_half_away: nearest integer, ties away from zero
- divide_round_half_away: the same rule for an exact integer ratio
- clamp_channel: clip to [0, 255] and cast to uint8
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from .errors import InvalidBufferError

CHANNELS = 4


def round_half_away(values):
    """Round to the nearest integer, with ties rounded away from zero.

    Works on scalars and numpy arrays. Note that numpy's own np.round
    rounds ties to even, which is not what we want here.

    Examples:
        >>> round_half_away(np.array([0.5, 1.5, 2.4, -0.5]))
        array([ 1.,  2.,  2., -1.])
    """
    values = np.asarray(values, dtype=np.float64)
    return np.where(values >= 0, np.floor(values + 0.5), np.ceil(values - 0.5))


def divide_round_half_away(numerator, denominator):
    """Compute round_half_away(numerator / denominator) exactly.

    Both arguments are integer scalars or arrays (broadcast together);
    denominator must be positive. No floating point is involved, so a
    true tie such as 5 / 2 is always detected as one.
    """
    numerator = np.asarray(numerator, dtype=np.int64)
    denominator = np.asarray(denominator, dtype=np.int64)
    magnitude = (2 * np.abs(numerator) + denominator) // (2 * denominator)
    return np.sign(numerator) * magnitude


def clamp_channel(values) -> np.ndarray:
    """Clamp channel values to [0, 255] and cast to uint8."""
    return np.clip(values, 0, 255).astype(np.uint8)


def is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _coerce_data(data: Any) -> np.ndarray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8)
    try:
        return np.asarray(data).reshape(-1)
    except (TypeError, ValueError) as e:
        raise InvalidBufferError(f"Pixel data is not a sequence of channel values: {e}")


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """RGBA pixel buffer.

    Attributes:
        width: Image width in pixels (positive).
        height: Image height in pixels (positive).
        data: Flat uint8 array of length width * height * 4, channel order
              R, G, B, A per pixel, rows top to bottom. Read-only.

    Raises:
        InvalidBufferError: If the dimensions are not positive integers,
            the data length does not match, or a value lies outside [0, 255].
    """

    width: int
    height: int
    data: np.ndarray

    def __post_init__(self):
        if not is_integer(self.width) or self.width <= 0:
            raise InvalidBufferError(f"width must be a positive integer, got {self.width!r}")
        if not is_integer(self.height) or self.height <= 0:
            raise InvalidBufferError(f"height must be a positive integer, got {self.height!r}")

        raw = _coerce_data(self.data)
        expected = self.width * self.height * CHANNELS
        if raw.size != expected:
            raise InvalidBufferError(
                f"data length {raw.size} does not match "
                f"{self.width}x{self.height}x{CHANNELS} = {expected}"
            )

        if raw.dtype != np.uint8:
            if raw.dtype.kind not in "iu":
                raise InvalidBufferError(
                    f"Pixel data must be integers, got dtype {raw.dtype}"
                )
            low, high = int(raw.min()), int(raw.max())
            if low < 0 or high > 255:
                raise InvalidBufferError(
                    f"Channel values must lie in [0, 255], got range [{low}, {high}]"
                )

        owned = np.array(raw, dtype=np.uint8, copy=True)
        owned.setflags(write=False)
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))
        object.__setattr__(self, "data", owned)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> PixelBuffer:
        """Build a buffer from an (H, W, 4) array."""
        if not isinstance(arr, np.ndarray):
            raise InvalidBufferError(f"Expected numpy.ndarray, got {type(arr).__name__}")
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise InvalidBufferError(
                f"Expected an (H, W, 4) RGBA array, got shape {arr.shape}"
            )
        height, width = arr.shape[:2]
        return cls(width=width, height=height, data=arr)

    @classmethod
    def filled(cls, width: int, height: int, rgba: Sequence[int]) -> PixelBuffer:
        """Build a buffer where every pixel has the same RGBA value."""
        if len(rgba) != CHANNELS:
            raise InvalidBufferError(f"Expected 4 channel values, got {len(rgba)}")
        if not is_integer(width) or not is_integer(height) or width <= 0 or height <= 0:
            raise InvalidBufferError(
                f"width and height must be positive integers, got {width!r}x{height!r}"
            )
        return cls(width=width, height=height, data=np.tile(np.asarray(rgba), width * height))

    def as_array(self) -> np.ndarray:
        """Return a read-only (H, W, 4) view of the data."""
        return self.data.reshape(self.height, self.width, CHANNELS)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the (r, g, b, a) values of the pixel at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} image"
            )
        start = (y * self.width + x) * CHANNELS
        r, g, b, a = (int(v) for v in self.data[start:start + CHANNELS])
        return r, g, b, a

    def copy(self) -> PixelBuffer:
        return PixelBuffer(self.width, self.height, self.data)

    def to_bytes(self) -> bytes:
        return self.data.tobytes()

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the image."""
        return self.width, self.height

    def __len__(self) -> int:
        return int(self.data.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.data, other.data)
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"


def as_buffer(obj: Any) -> PixelBuffer:
    """Return obj as a validated PixelBuffer.

    Accepts a PixelBuffer, or any object exposing width, height and data
    attributes (e.g. a decoder's own image struct), which is validated
    on conversion.

    Raises:
        InvalidBufferError: If obj cannot be read as a well-formed buffer.
    """
    if isinstance(obj, PixelBuffer):
        # Guard against data swapped in behind the frozen dataclass
        if obj.data.size != obj.width * obj.height * CHANNELS:
            raise InvalidBufferError(
                f"data length {obj.data.size} does not match "
                f"{obj.width}x{obj.height}x{CHANNELS} = {obj.width * obj.height * CHANNELS}"
            )
        return obj
    try:
        width, height, data = obj.width, obj.height, obj.data
    except AttributeError:
        raise InvalidBufferError(
            f"Expected a pixel buffer with width, height and data, got {type(obj).__name__}"
        )
    return PixelBuffer(width=width, height=height, data=data)
