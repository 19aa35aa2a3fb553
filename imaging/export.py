"""Download naming and the kernel size options offered to users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from config import ALLOWED_KERNEL_SIZES, EXPORT_FILENAME_PREFIX, KERNEL_SIZE_LABELS


@dataclass(frozen=True)
class KernelSizeOption:
    value: int
    label: str
    description: str


KERNEL_SIZE_OPTIONS = tuple(
    KernelSizeOption(
        value=size,
        label=f"{size}×{size} ({KERNEL_SIZE_LABELS[size][0]})",
        description=KERNEL_SIZE_LABELS[size][1],
    )
    for size in ALLOWED_KERNEL_SIZES
)


def download_filename(now: datetime | None = None) -> str:
    """Timestamped PNG filename, e.g. smoothed-image-2024-05-01T13-45-09.png."""
    now = now or datetime.now()
    stamp = now.strftime("%Y-%m-%dT%H-%M-%S")
    return f"{EXPORT_FILENAME_PREFIX}-{stamp}.png"
