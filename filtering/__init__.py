"""
Pixel filtering module for the image smoothing filter.

This module provides pure, deterministic functions over RGBA pixel
buffers. All functions follow the pattern: input -> new output, with no
mutation of the original buffer.

Key components:
- buffer: PixelBuffer value type plus explicit rounding/clamping helpers
- grayscale: grayscale() luminance conversion (alpha preserved)
- smoothing: smooth() neighborhood-averaging filter with clipped borders
- steps: Class-based steps with a common FilterStep interface
- config: FilterConfig dataclass for the user-facing settings
- pipeline: run_pipeline() applying grayscale (optional) then smoothing

Two APIs are available:
1. Function-based: grayscale(buf), smooth(buf, k), run_pipeline(buf, config)
2. Class-based: Pipeline(steps=[...]).run(buf) -> PipelineStepResults
"""

from .errors import FilterError, InvalidBufferError, InvalidKernelError
from .buffer import (
    PixelBuffer,
    as_buffer,
    clamp_channel,
    divide_round_half_away,
    round_half_away,
)
from .grayscale import grayscale
from .smoothing import smooth, validate_kernel_size
from .config import FilterConfig, FilterResult
from .pipeline import run_pipeline, build_pipeline
from .steps import (
    FilterStep,
    GrayscaleStep,
    SmoothStep,
    Pipeline,
    PipelineStepResults,
    StepResult,
)

__all__ = [
    # Errors
    "FilterError",
    "InvalidBufferError",
    "InvalidKernelError",
    # Buffer and numeric helpers
    "PixelBuffer",
    "as_buffer",
    "clamp_channel",
    "divide_round_half_away",
    "round_half_away",
    # Core transformations
    "grayscale",
    "smooth",
    "validate_kernel_size",
    # Config and results
    "FilterConfig",
    "FilterResult",
    # Function API
    "run_pipeline",
    "build_pipeline",
    # Class-based API
    "FilterStep",
    "GrayscaleStep",
    "SmoothStep",
    "Pipeline",
    "PipelineStepResults",
    "StepResult",
]
