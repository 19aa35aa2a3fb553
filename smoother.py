#!/usr/bin/env python3
"""
Unified CLI for the image smoothing filter.

Usage:
    smoother process <image>                 # 3x3 smoothing, timestamped PNG output
    smoother process <image> -k 7 -g -o out.png
    smoother process <dir> -o <out_dir>      # Every image in a directory
    smoother inspect <image> <x> <y>         # Show one pixel's values
    smoother serve                           # Launch the web app (port 30003)
"""

import argparse
import logging
import sys

from config import WEB_HOST, WEB_PORT
from logging_utils import configure_logging, add_logging_args
from cli.process import add_process_subparser
from cli.inspect_pixel import add_inspect_subparser

logger = logging.getLogger(__name__)


def cmd_serve(args: argparse.Namespace) -> int:
    """Launch the web app."""
    from web import run_server
    run_server(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smoother",
        description="Image smoothing filter - neighborhood averaging with optional grayscale",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_process_subparser(subparsers)
    add_inspect_subparser(subparsers)

    serve_parser = subparsers.add_parser(
        "serve",
        help=f"Launch the web app (port {WEB_PORT})",
    )
    serve_parser.add_argument("--host", default=WEB_HOST, help=f"Bind address (default: {WEB_HOST})")
    serve_parser.add_argument("--port", type=int, default=WEB_PORT, help=f"Port (default: {WEB_PORT})")
    serve_parser.set_defaults(_cmd=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
