"""
Filter pipeline that applies the configured steps in order.

This module provides two APIs:
1. run_pipeline() - Function API that builds and runs the standard pipeline
2. Pipeline class - Class-based API for composable step sequences

Pipeline order is fixed: Grayscale (if enabled) → Smooth. Smoothing a
grayscale image and converting a smoothed image to grayscale give
different results; only the former is supported.
"""

import logging
from time import perf_counter

from .buffer import PixelBuffer, as_buffer
from .config import FilterConfig, FilterResult
from .steps import FilterStep, GrayscaleStep, Pipeline, SmoothStep

logger = logging.getLogger(__name__)


def build_pipeline(config: FilterConfig) -> Pipeline:
    """Build a Pipeline from a FilterConfig.

    1. GrayscaleStep - only if config.grayscale is set
    2. SmoothStep - always

    Args:
        config: Filter configuration.

    Returns:
        Pipeline configured according to the config.
    """
    steps: list[FilterStep] = []

    if config.grayscale:
        steps.append(GrayscaleStep())

    steps.append(SmoothStep(kernel_size=config.kernel_size))

    return Pipeline(steps=steps)


def run_pipeline(
    buffer: PixelBuffer,
    config: FilterConfig | None = None,
    artifact_dir: str | None = None,
) -> FilterResult:
    """Apply the full filter pipeline to a pixel buffer.

    The input buffer is never modified, so the same source can be run
    again with different settings.

    Args:
        buffer: Source pixel buffer (full resolution).
        config: Filter configuration. If None, uses default settings.
        artifact_dir: Optional directory to save intermediate images.

    Returns:
        FilterResult with the original and processed buffers.

    Raises:
        ValueError: If the configuration violates the application policy.
        InvalidBufferError: If buffer is malformed.

    Examples:
        >>> src = PixelBuffer.filled(4, 3, (10, 20, 30, 255))
        >>> run_pipeline(src, FilterConfig(grayscale=True)).processed.pixel(0, 0)
        (18, 18, 18, 255)
    """
    if config is None:
        config = FilterConfig()

    config.validate()
    original = as_buffer(buffer)

    logger.info(
        "Processing %dx%d image (%s)",
        original.width, original.height, config.describe(),
    )

    t0 = perf_counter()
    pipeline = build_pipeline(config)
    pipeline_result = pipeline.run(original, artifact_dir=artifact_dir)
    elapsed_ms = (perf_counter() - t0) * 1000

    logger.info("Processing complete in %.2f ms", elapsed_ms)

    return FilterResult(
        original=original,
        processed=pipeline_result.final,
        config=config,
        elapsed_ms=elapsed_ms,
        artifact_paths=pipeline_result.artifact_paths,
        metadata=pipeline_result.all_metadata,
    )
