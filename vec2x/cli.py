"""
vec2x - Command line entry point
"""
import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import LOG_LEVELS, settings
from .export import ExportFormat, parse_formats
from .ingestion import InputSource
from .rasterization import parse_color

logger = logging.getLogger(__name__)


def _input_source(value: str) -> InputSource:
    try:
        return InputSource.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _format_list(value: str) -> List[ExportFormat]:
    try:
        return parse_formats(v for v in value.split(",") if v.strip())
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _background(value: str):
    try:
        return parse_color(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if not math.isfinite(number) or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vec2x",
        description="Convert an SVG image into raster formats (AVIF, JPEG, PNG, TIFF, WebP)",
    )
    parser.add_argument(
        "input",
        type=_input_source,
        help="Path to input SVG file. Use '-' to read input from stdin.",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output directory. If not specified it will use current working directory.",
    )
    parser.add_argument(
        "--filename",
        default=None,
        help="Custom output filename without an extension. Required when input is from stdin.",
    )
    parser.add_argument(
        "-f", "--format",
        type=_format_list,
        default=None,
        help=(
            "Comma-separated list of formats "
            f"({','.join(f.value for f in ExportFormat)}). By default, all formats are generated."
        ),
    )
    parser.add_argument("--width", type=_positive_int, help="Output width in pixels (overrides '--scale')")
    parser.add_argument("--height", type=_positive_int, help="Output height in pixels (overrides '--scale')")
    parser.add_argument(
        "--scale",
        type=_positive_float,
        default=settings.default_scale,
        help="Scale factor relative to the SVG's intrinsic size",
    )
    parser.add_argument(
        "--background",
        type=_background,
        default=None,
        help=(
            "Background color in hex ('#RRGGBB' or '#RRGGBBAA'). By default, formats with an "
            "alpha channel are transparent, otherwise solid white."
        ),
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.log_level,
        help=f"Logging level (default {settings.log_level})",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def setup_logging(level: str):
    """Configure root logging once for the CLI"""
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file))

    logging.basicConfig(
        level=getattr(logging, level),
        format=settings.log_format,
        handlers=handlers,
    )


def main(argv: Optional[List[str]] = None) -> int:
    from .pipeline import ConversionConfig, Pipeline

    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    config = ConversionConfig(
        input=args.input,
        filename=args.filename,
        width=args.width,
        height=args.height,
        scale=args.scale,
        background=args.background,
        output_dir=args.output,
        formats=args.format,
        max_workers=settings.max_workers,
    )

    logger.debug(f"Running with {config}")
    result = Pipeline(config).run()

    if result.success:
        print("Success! Output files:")
        for f in result.output_files:
            print(f"  - {f}")
        return 0

    print(f"Failed: {result.error}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    sys.exit(main())
