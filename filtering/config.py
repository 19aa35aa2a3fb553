"""
Configuration and result types for the filter pipeline.

FilterConfig captures the two user-facing settings (grayscale toggle and
kernel size) so a run can be reproduced against the original buffer with
different parameters.
"""

from dataclasses import dataclass, field
from typing import Any

from config import ALLOWED_KERNEL_SIZES, DEFAULT_GRAYSCALE, DEFAULT_KERNEL_SIZE
from .buffer import PixelBuffer


@dataclass(frozen=True)
class FilterConfig:
    """Settings for one pipeline run.

    Attributes:
        grayscale: Convert to grayscale before smoothing.
        kernel_size: Side of the square smoothing window. Must be one of
                     config.ALLOWED_KERNEL_SIZES.
    """

    grayscale: bool = DEFAULT_GRAYSCALE
    kernel_size: int = DEFAULT_KERNEL_SIZE

    def validate(self) -> None:
        """Validate configuration parameters against the application policy.

        Raises:
            ValueError: If any parameter is invalid.
        """
        if not isinstance(self.grayscale, bool):
            raise ValueError(f"grayscale must be a bool, got {self.grayscale!r}")

        if isinstance(self.kernel_size, bool) or self.kernel_size not in ALLOWED_KERNEL_SIZES:
            allowed = ", ".join(str(size) for size in ALLOWED_KERNEL_SIZES)
            raise ValueError(
                f"kernel_size must be one of {allowed}, got {self.kernel_size!r}"
            )

    def describe(self) -> str:
        """Short label such as "grayscale + 5x5" used in log lines."""
        kernel = f"{self.kernel_size}x{self.kernel_size}"
        return f"grayscale + {kernel}" if self.grayscale else kernel


@dataclass
class FilterResult:
    """Result of the filter pipeline.

    Attributes:
        original: The untouched input buffer.
        processed: Final output buffer (grayscale if requested, then smoothed).
        config: The configuration used.
        elapsed_ms: Wall-clock time spent in the pipeline, in milliseconds.
        artifact_paths: Dict mapping step names to saved file paths (if artifact saving enabled).
        metadata: Aggregated metadata from all steps.
    """

    original: PixelBuffer
    processed: PixelBuffer
    config: FilterConfig
    elapsed_ms: float = 0.0
    artifact_paths: dict[str, str] = field(default_factory=dict)
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def dimensions(self) -> tuple[int, int]:
        """(width, height) of the processed buffer."""
        return self.processed.size
