"""Process command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from tqdm import tqdm

from config import (
    ALLOWED_KERNEL_SIZES,
    DEFAULT_KERNEL_SIZE,
    MAX_UPLOAD_BYTES,
    SUPPORTED_IMAGE_EXTENSIONS,
)
from filtering import FilterConfig, FilterResult, run_pipeline
from imaging import download_filename, format_file_size, load_image, save_image, validate_upload

logger = logging.getLogger(__name__)


def add_process_subparser(subparsers: argparse._SubParsersAction) -> None:
    process_parser = subparsers.add_parser(
        "process",
        help="Smooth an image file or every image in a directory",
    )
    process_parser.add_argument(
        "source",
        help="Image file or directory of images",
    )
    process_parser.add_argument(
        "-o", "--output",
        help="Output file (single image) or directory (directory source). "
             "Default: timestamped PNG in the current directory, or <source>/smoothed",
    )
    process_parser.add_argument(
        "-k", "--kernel-size",
        type=int,
        choices=ALLOWED_KERNEL_SIZES,
        default=DEFAULT_KERNEL_SIZE,
        help=f"Neighborhood size (default: {DEFAULT_KERNEL_SIZE})",
    )
    process_parser.add_argument(
        "-g", "--grayscale",
        action="store_true",
        help="Convert to grayscale before smoothing",
    )
    process_parser.add_argument(
        "--artifacts",
        metavar="DIR",
        help="Save the original and every intermediate step as PNG under DIR",
    )
    process_parser.add_argument(
        "--max-size",
        type=int,
        default=MAX_UPLOAD_BYTES,
        help=f"Reject inputs larger than this many bytes (default: {format_file_size(MAX_UPLOAD_BYTES)})",
    )
    process_parser.set_defaults(_cmd=cmd_process)


def find_images(folder: Path) -> list[Path]:
    """List supported image files directly inside folder, sorted by name."""
    return sorted(
        p for p in folder.iterdir()
        if p.is_file() and p.suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS
    )


def process_file(
    source: Path,
    output: Path,
    config: FilterConfig,
    artifact_dir: str | None = None,
    max_size: int = MAX_UPLOAD_BYTES,
) -> FilterResult:
    """Load, filter and save one image.

    Raises:
        ValueError: If the file is rejected, cannot be decoded, or the
            filter settings are invalid.
        OSError: If the file cannot be read or written.
    """
    validation = validate_upload(source.name, None, source.stat().st_size, max_size)
    if not validation:
        raise ValueError(validation.message)

    buffer = load_image(source)
    result = run_pipeline(buffer, config, artifact_dir=artifact_dir)
    save_image(result.processed, output)
    return result


def _process_directory(args: argparse.Namespace, source: Path, config: FilterConfig) -> int:
    output_dir = Path(args.output) if args.output else source / "smoothed"
    if output_dir.resolve() == source.resolve():
        logger.error("Output directory must differ from the source directory")
        return 1

    images = find_images(source)
    if not images:
        logger.error("No supported images found in %s", source)
        return 1

    failures = 0
    for path in tqdm(images, desc="Smoothing", unit="img"):
        artifact_dir = f"{args.artifacts}/{path.stem}" if args.artifacts else None
        try:
            process_file(
                path,
                output_dir / f"{path.stem}.png",
                config,
                artifact_dir=artifact_dir,
                max_size=args.max_size,
            )
        except (ValueError, OSError) as e:
            logger.warning("Skipping %s: %s", path.name, e)
            failures += 1

    logger.info(
        "Processed %d/%d images into %s",
        len(images) - failures, len(images), output_dir,
    )
    return 1 if failures else 0


def cmd_process(args: argparse.Namespace) -> int:
    config = FilterConfig(grayscale=args.grayscale, kernel_size=args.kernel_size)
    source = Path(args.source)

    if source.is_dir():
        return _process_directory(args, source, config)

    if not source.is_file():
        logger.error("Source not found: %s", source)
        return 1

    output = Path(args.output) if args.output else Path(download_filename())
    try:
        result = process_file(
            source,
            output,
            config,
            artifact_dir=args.artifacts,
            max_size=args.max_size,
        )
    except (ValueError, OSError) as e:
        logger.error("Failed to process %s: %s", source, e)
        return 1

    width, height = result.dimensions
    logger.info("Saved %s (%dx%d, %s)", output, width, height, config.describe())
    for name, path in result.artifact_paths.items():
        logger.info("  %-10s %s", name, path)
    return 0
