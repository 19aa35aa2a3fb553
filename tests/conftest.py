"""Pytest configuration — fast-by-default TDD setup.

Slow tests (large images checked pixel by pixel against the reference
box filter) are skipped unless --slow is passed.
Run the full suite:   pytest --slow
Run fast tests only:  pytest          (default)
"""
import io
import math

import numpy as np
import pytest
from PIL import Image

from filtering import PixelBuffer


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Run slow tests that compare large images against the reference filter",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        return  # run everything
    skip_slow = pytest.mark.skip(reason="slow test skipped — pass --slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def reference_smooth(buffer: PixelBuffer, kernel_size: int) -> PixelBuffer:
    """Visit every kernel cell of every pixel, skipping out-of-bounds samples."""
    width, height = buffer.width, buffer.height
    src = buffer.data.tolist()
    offset = (kernel_size - 1) // 2
    out = []
    for y in range(height):
        for x in range(width):
            sums = [0, 0, 0, 0]
            count = 0
            for dy in range(-offset, offset + 1):
                for dx in range(-offset, offset + 1):
                    sx, sy = x + dx, y + dy
                    if 0 <= sx < width and 0 <= sy < height:
                        i = (sy * width + sx) * 4
                        for c in range(4):
                            sums[c] += src[i + c]
                        count += 1
            for c in range(4):
                out.append(math.floor(sums[c] / count + 0.5))
    return PixelBuffer(width, height, out)


def random_buffer(rng: np.random.Generator, width: int, height: int) -> PixelBuffer:
    return PixelBuffer.from_array(rng.integers(0, 256, (height, width, 4), dtype=np.uint8))


def png_bytes(buffer: PixelBuffer) -> bytes:
    out = io.BytesIO()
    Image.fromarray(buffer.as_array().copy()).save(out, format="PNG")
    return out.getvalue()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def sample_buffer(rng):
    """A 6x4 RGBA buffer with random channels, alpha included."""
    return random_buffer(rng, 6, 4)


@pytest.fixture
def sample_png(tmp_path, sample_buffer):
    """sample_buffer written to disk as PNG."""
    path = tmp_path / "sample.png"
    path.write_bytes(png_bytes(sample_buffer))
    return path
