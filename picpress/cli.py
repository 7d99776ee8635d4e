#!/usr/bin/env python3
"""
picpress command line interface.

    picpress -i photo.png -o photo.webp -q 80 -r 800x600 -m fill
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import DEFAULT_QUALITY, DEFAULT_SPEED, LOG_DATE_FORMAT, LOG_FORMAT, LOG_LEVEL, LOG_LEVELS
from .errors import PicPressError
from .models.compress_options import CompressOptions, CompressResult
from .models.output_format import OutputFormat
from .models.resize_spec import ResizeMethod, parse_dimensions
from .pipeline.compress import compress_with_options
from .services.format_service import FormatService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="picpress",
        description="Convert and compress an image to JPEG, PNG, WebP or AVIF.",
    )
    parser.add_argument("-i", "--input", required=True, help="Source file")
    parser.add_argument("-o", "--output", required=True, help="Output file")
    parser.add_argument(
        "-q", "--quality", type=int, default=DEFAULT_QUALITY,
        help="Quality (percentage) of the output picture, used by webp/jpeg/avif",
    )
    parser.add_argument("-f", "--format", help="Output file format (jpeg, png, webp, avif)")
    parser.add_argument(
        "-r", "--resize", metavar="WIDTHxHEIGHT",
        help="Resize dimensions in WIDTHxHEIGHT format (e.g., 800x600)",
    )
    parser.add_argument(
        "-m", "--method",
        help="Resize style: " + ", ".join(m.value for m in ResizeMethod) + " (default: fit)",
    )
    parser.add_argument(
        "-s", "--speed", type=int, default=DEFAULT_SPEED,
        help="AVIF encoder speed 1-10, lower is slower with better compression",
    )
    parser.add_argument(
        "--log-level", default=LOG_LEVEL,
        choices=LOG_LEVELS,
        type=str.upper,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def build_options(args: argparse.Namespace) -> CompressOptions:
    """
    Turn parsed arguments into CompressOptions, applying the CLI-side checks:
    resize syntax, quality range and, for AVIF output, speed range.
    """
    resize = parse_dimensions(args.resize) if args.resize else None
    options = CompressOptions(
        input_path=args.input,
        output_path=args.output,
        format=args.format,
        quality=args.quality,
        resize=resize,
        method=args.method,
        speed=args.speed,
    )
    options.validate(FormatService.resolve(options.output_path, options.format))
    return options


def _report_start(options: CompressOptions) -> None:
    print(f"Input file: {options.input_path}")
    print(f"Output file: {options.output_path}")
    print(f"Quality: {options.quality}")
    if options.resize is not None:
        width, height = options.resize
        print(f"Resize: {width}x{height}")
        print(f"Resize Method: {options.method or ResizeMethod.FIT.value}")


def _report_result(options: CompressOptions, result: CompressResult) -> None:
    message = (
        f"Wrote {result.format.value} {result.width}x{result.height}, "
        f"{result.bytes_written} bytes"
    )
    try:
        source_size = Path(options.input_path).stat().st_size
    except OSError:
        source_size = 0
    if source_size:
        message += f" ({result.bytes_written / source_size:.1%} of input)"
    if result.format is OutputFormat.PNG and options.quality != DEFAULT_QUALITY:
        message += " - quality is ignored for png"
    print(message)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=args.log_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    try:
        options = build_options(args)
        _report_start(options)
        result = compress_with_options(options)
    except PicPressError as exc:
        logger.debug("Compression failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    _report_result(options, result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
