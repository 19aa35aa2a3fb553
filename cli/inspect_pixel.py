"""Inspect command: print the channel values of one pixel."""

from __future__ import annotations

import argparse
import logging

from imaging import ImageDecodeError, inspect_pixel, load_image

logger = logging.getLogger(__name__)


def add_inspect_subparser(subparsers: argparse._SubParsersAction) -> None:
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show RGBA/hex/HSL values of a pixel",
    )
    inspect_parser.add_argument("image", help="Image file")
    inspect_parser.add_argument("x", type=float, help="Column (clamped into the image)")
    inspect_parser.add_argument("y", type=float, help="Row (clamped into the image)")
    inspect_parser.set_defaults(_cmd=cmd_inspect)


def cmd_inspect(args: argparse.Namespace) -> int:
    try:
        buffer = load_image(args.image)
    except (ImageDecodeError, OSError) as e:
        logger.error("Cannot read %s: %s", args.image, e)
        return 1

    try:
        info = inspect_pixel(buffer, args.x, args.y)
    except ValueError as e:
        logger.error("Cannot inspect %s: %s", args.image, e)
        return 1

    pct = info.percentages
    h, s, l = info.hsl

    logger.info("Pixel (%d, %d) of %dx%d image", info.x, info.y, buffer.width, buffer.height)
    logger.info("  Red:    %3d  (%d%%)", info.r, pct["r"])
    logger.info("  Green:  %3d  (%d%%)", info.g, pct["g"])
    logger.info("  Blue:   %3d  (%d%%)", info.b, pct["b"])
    logger.info("  Alpha:  %.2f (%d%%)", info.alpha, pct["a"])
    logger.info("  Hex:    %s", info.hex)
    logger.info("  HSL:    %d°, %d%%, %d%%", h, s, l)
    return 0
