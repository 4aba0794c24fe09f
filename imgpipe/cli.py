"""
imgpipe command line

Normalize a single image: optional EXIF auto-orientation and downscaling,
then re-encode to JPEG, PNG or WEBP.

Usage:
    imgpipe INPUT [-o OUTPUT] [-f FORMAT] [-q QUALITY] [options]

Examples:
    # Fix orientation and shrink a phone photo in place
    imgpipe photo.jpg --auto-orient --max-width 1600

    # Convert to WEBP at quality 80
    imgpipe photo.jpg -o photo.webp -q 80

    # Read from stdin, print a PNG data URL
    cat scan.bmp | imgpipe - -f png --data-url
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .application.pipeline import ImagePipeline
from .config.settings import AppConfig, get_default_config
from .cross_cutting.error_handling import handle_exception
from .cross_cutting.logging import setup_logging, get_logger
from .domain.value_objects.image_format import ImageFormat


logger = get_logger(__name__)

STDIO = "-"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="imgpipe",
        description="Image ingestion and normalization pipeline",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        "input",
        help="Input file path, a data: URL, or '-' to read bytes from stdin"
    )
    parser.add_argument(
        "--output", "-o",
        help="Output file path, or '-' for stdout (default: overwrite the input file)"
    )
    parser.add_argument(
        "--format", "-f",
        help="Output format: jpeg, png or webp (default: from the output or input extension)"
    )
    parser.add_argument(
        "--quality", "-q", type=int,
        help="JPEG/WEBP quality 0-100 (WEBP 101 = lossless), or PNG compression level -1-9"
    )
    parser.add_argument(
        "--max-width", type=int,
        help="Downscale to at most this width (defaults to --max-height)"
    )
    parser.add_argument(
        "--max-height", type=int,
        help="Downscale to at most this height (defaults to --max-width)"
    )
    parser.add_argument(
        "--auto-orient", action="store_true",
        help="Rotate according to the EXIF orientation tag"
    )
    parser.add_argument(
        "--data-url", action="store_true",
        help="Print the result as a base64 data URL instead of writing a file"
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (overrides IMGPIPE_LOG_LEVEL)"
    )

    return parser


def open_input(value: str, config: AppConfig) -> ImagePipeline:
    """Create a pipeline for the INPUT argument."""
    if value == STDIO:
        return ImagePipeline.from_bytes(sys.stdin.buffer.read(), config=config)
    if value.startswith("data:"):
        return ImagePipeline.from_data_url(value, config=config)
    return ImagePipeline.from_file(value, config=config)


def infer_format(args: argparse.Namespace) -> Optional[str]:
    """
    Pick the output format: --format, then the output extension, then the
    input extension.
    """
    if args.format:
        return args.format

    for candidate in (args.output, args.input):
        if not candidate or candidate == STDIO or candidate.startswith("data:"):
            continue
        fmt = ImageFormat.from_path(candidate)
        if fmt is not None:
            return fmt.name.lower()

    return None


@handle_exception(default_return=1)
def run(args: argparse.Namespace, config: AppConfig) -> int:
    """Execute the pipeline described by the parsed arguments."""
    fmt = infer_format(args)
    if fmt is None:
        logger.error("Cannot infer the output format, pass --format")
        return 1

    pipeline = open_input(args.input, config)
    pipeline.set_output(fmt, args.quality)

    if args.auto_orient:
        pipeline.cache_metadata().rotate_from_metadata()

    if args.max_width is not None or args.max_height is not None:
        max_width = args.max_width if args.max_width is not None else args.max_height
        pipeline.downscale(max_width, args.max_height)

    if args.data_url:
        print(pipeline.to_data_url())
    elif args.output == STDIO:
        sys.stdout.buffer.write(pipeline.to_bytes())
        sys.stdout.buffer.flush()
    else:
        written = pipeline.to_file(Path(args.output) if args.output else None)
        logger.info(f"Saved {written}")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    config = get_default_config()
    if args.log_level:
        config.logging.level = args.log_level
    setup_logging(config.logging.level, config.logging.log_file, config.logging.format)

    return run(args, config)


if __name__ == "__main__":
    sys.exit(main())
