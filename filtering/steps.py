"""
Filter step classes with a common interface.

Each step is a frozen dataclass that implements the FilterStep interface.
Steps are pure: they take a pixel buffer and return a new buffer without
touching the original.

Usage:
    from filtering.steps import GrayscaleStep, SmoothStep, Pipeline

    pipeline = Pipeline(steps=[
        GrayscaleStep(),
        SmoothStep(kernel_size=5),
    ])
    result = pipeline.run(buffer)
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from time import perf_counter
from typing import Any

import cv2

from .buffer import PixelBuffer
from .grayscale import grayscale
from .smoothing import smooth, validate_kernel_size

logger = logging.getLogger(__name__)


class FilterStep(ABC):
    """Base class for filter steps.

    Steps should be pure functions: they take an input buffer and return
    a new output without mutating the original.
    """

    @abstractmethod
    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """Apply this step to a pixel buffer.

        Args:
            buffer: Input pixel buffer.

        Returns:
            Processed buffer as a new PixelBuffer.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging and artifact filenames."""
        pass

    def get_metadata(self) -> dict[str, Any]:
        """Return any metadata produced by this step. Empty by default."""
        return {}


@dataclass(frozen=True)
class GrayscaleStep(FilterStep):
    """Replace R, G and B with the pixel's luma, keeping alpha."""

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        return grayscale(buffer)

    @property
    def name(self) -> str:
        return "grayscale"


@dataclass(frozen=True)
class SmoothStep(FilterStep):
    """Average each pixel over a square neighborhood.

    Attributes:
        kernel_size: Side of the square window. Must be odd and >= 1;
                     validated when the step is created.
    """

    kernel_size: int = 3

    def __post_init__(self):
        validate_kernel_size(self.kernel_size)

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        return smooth(buffer, self.kernel_size)

    @property
    def name(self) -> str:
        return f"smooth({self.kernel_size})"

    def get_metadata(self) -> dict[str, Any]:
        return {"kernel_size": self.kernel_size}


@dataclass
class StepResult:
    """Result of applying a single filter step.

    Attributes:
        name: Name of the step that produced this result.
        buffer: Output buffer from the step.
        metadata: Any metadata produced by the step (e.g., kernel_size).
        artifact_path: Path where the buffer was saved (if artifact saving enabled).
    """

    name: str
    buffer: PixelBuffer
    metadata: dict[str, Any] = field(default_factory=dict)
    artifact_path: str | None = None


@dataclass
class PipelineStepResults:
    """Results from running a filter pipeline.

    Attributes:
        original: The input buffer.
        steps: StepResult for each step, in order.
        original_artifact_path: Path where the input was saved (if artifact saving enabled).
    """

    original: PixelBuffer
    steps: list[StepResult] = field(default_factory=list)
    original_artifact_path: str | None = None

    @property
    def final(self) -> PixelBuffer:
        """Get the final processed buffer."""
        if not self.steps:
            return self.original
        return self.steps[-1].buffer

    def get_intermediate(self, step_name: str) -> PixelBuffer | None:
        """Get an intermediate buffer by step name (e.g. "grayscale", "smooth(5)")."""
        for step in self.steps:
            if step.name == step_name:
                return step.buffer
        return None

    @property
    def all_metadata(self) -> dict[str, Any]:
        """All step metadata merged into one dict; later steps win."""
        result = {}
        for step in self.steps:
            result.update(step.metadata)
        return result

    @property
    def artifact_paths(self) -> dict[str, str]:
        """Artifact paths keyed by normalized step name ("original", "grayscale", "smooth")."""
        paths = {}
        if self.original_artifact_path:
            paths["original"] = self.original_artifact_path
        for step in self.steps:
            if step.artifact_path:
                key = step.name.split("(")[0]
                paths[key] = step.artifact_path
        return paths


def _save_buffer(buffer: PixelBuffer, path: str) -> None:
    """Save a buffer to disk as a BGRA PNG."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    bgra = cv2.cvtColor(buffer.as_array().copy(), cv2.COLOR_RGBA2BGRA)
    if not cv2.imwrite(path, bgra):
        raise OSError(f"Failed to write artifact: {path}")


@dataclass
class Pipeline:
    """A sequence of filter steps applied in order.

    The output of each step is the input of the next. All intermediate
    results are preserved.

    Attributes:
        steps: FilterStep instances to apply in order.
    """

    steps: list[FilterStep]

    def run(
        self,
        buffer: PixelBuffer,
        artifact_dir: str | None = None,
    ) -> PipelineStepResults:
        """Run the pipeline on a buffer.

        Args:
            buffer: Input pixel buffer.
            artifact_dir: Optional directory to save intermediate images.
                          If provided, saves original.png and each step's output.

        Returns:
            PipelineStepResults containing all intermediate buffers and metadata.
        """
        result = PipelineStepResults(original=buffer)
        current = buffer

        if artifact_dir:
            original_path = f"{artifact_dir}/original.png"
            _save_buffer(buffer, original_path)
            result.original_artifact_path = original_path

        for step in self.steps:
            t0 = perf_counter()
            output = step.apply(current)
            logger.debug("Step %s took %.2f ms", step.name, (perf_counter() - t0) * 1000)

            artifact_path = None
            if artifact_dir:
                step_key = step.name.split("(")[0]
                artifact_path = f"{artifact_dir}/{step_key}.png"
                _save_buffer(output, artifact_path)

            result.steps.append(
                StepResult(
                    name=step.name,
                    buffer=output,
                    metadata=step.get_metadata(),
                    artifact_path=artifact_path,
                )
            )
            current = output

        return result

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self):
        return iter(self.steps)
