"""Read a single pixel's values for display (hover inspection)."""

from __future__ import annotations

import math
from dataclasses import dataclass, asdict

from filtering import PixelBuffer, round_half_away


def _round(value: float) -> int:
    return int(round_half_away(value))


def rgb_to_hsl(r: int, g: int, b: int) -> tuple[int, int, int]:
    """Convert 0-255 RGB to (hue degrees, saturation %, lightness %)."""
    rf, gf, bf = r / 255, g / 255, b / 255
    high, low = max(rf, gf, bf), min(rf, gf, bf)
    lightness = (high + low) / 2

    if high == low:
        hue = saturation = 0.0
    else:
        d = high - low
        saturation = d / (2 - high - low) if lightness > 0.5 else d / (high + low)
        if high == rf:
            hue = (gf - bf) / d + (6 if gf < bf else 0)
        elif high == gf:
            hue = (bf - rf) / d + 2
        else:
            hue = (rf - gf) / d + 4
        hue /= 6

    return _round(hue * 360), _round(saturation * 100), _round(lightness * 100)


@dataclass(frozen=True)
class PixelInfo:
    """Channel values of one pixel.

    r, g, b and a are raw 0-255 channel values; alpha is normalized
    to 0.0-1.0 with two decimals, the way it is shown to users.
    """

    x: int
    y: int
    r: int
    g: int
    b: int
    a: int
    alpha: float
    hex: str
    hsl: tuple[int, int, int]

    @property
    def percentages(self) -> dict[str, int]:
        """Each colour channel as a percentage of 255, alpha as a percentage of 1."""
        return {
            "r": _round(self.r / 255 * 100),
            "g": _round(self.g / 255 * 100),
            "b": _round(self.b / 255 * 100),
            "a": _round(self.alpha * 100),
        }

    def to_dict(self) -> dict:
        data = asdict(self)
        data["hsl"] = list(self.hsl)
        data["percentages"] = self.percentages
        return data


def inspect_pixel(buffer: PixelBuffer, x: float, y: float) -> PixelInfo:
    """Return the values of the pixel under (x, y).

    Coordinates are clamped into the image and floored, so pointer
    positions slightly outside the image still resolve to an edge pixel.

    Raises:
        ValueError: If x or y is NaN.
    """
    for name, value in (("x", x), ("y", y)):
        if math.isnan(value):
            raise ValueError(f"{name} coordinate must be a number, got {value}")

    col = math.floor(min(max(x, 0), buffer.width - 1))
    row = math.floor(min(max(y, 0), buffer.height - 1))
    r, g, b, a = buffer.pixel(col, row)

    return PixelInfo(
        x=col,
        y=row,
        r=r,
        g=g,
        b=b,
        a=a,
        alpha=_round(a / 255 * 100) / 100,
        hex=f"#{r:02x}{g:02x}{b:02x}",
        hsl=rgb_to_hsl(r, g, b),
    )
