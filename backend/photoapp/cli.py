"""
Command line image transform.

Usage:
    photoapp-transform photo.png out.jpg --width 800
    photoapp-transform photo.png out.png --sepia --blur
    photoapp-transform photo.png --info
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from photoapp.logging_config import setup_logging
from photoapp.models.schemas.image import TransformRequest
from photoapp.services.image.processor import ImageProcessor
from photoapp.services.image.transform import (
    ImageProcessingError,
    get_dimensions,
    normalize_output_format,
    transform,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resize, convert and filter an image")
    parser.add_argument("input", type=Path, help="Source image file")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="Destination file (format taken from its extension unless --format is given)",
    )
    parser.add_argument("--width", type=int, default=None, help="Target width in pixels")
    parser.add_argument("--height", type=int, default=None, help="Target height in pixels")
    parser.add_argument("--format", default=None, help="Output format: jpg, png, bmp")
    parser.add_argument("--sepia", action="store_true", help="Apply sepia tone")
    parser.add_argument("--blur", action="store_true", help="Apply 3x3 box blur")
    parser.add_argument("--quality", type=int, default=None, help="JPEG quality (1-95)")
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print WIDTHxHEIGHT and format of the input, then exit",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: from settings)")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the transform CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.info and args.output is None:
        parser.error("output is required unless --info is given")

    try:
        raw = args.input.read_bytes()
    except OSError as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 1

    try:
        if args.info:
            info = ImageProcessor().get_info(raw)
            print(f"{info.width}x{info.height} {info.format}")
            return 0

        fmt = args.format or args.output.suffix.lstrip(".") or None
        request = TransformRequest(
            width=args.width,
            height=args.height,
            format=normalize_output_format(fmt),
            sepia=args.sepia,
            blur=args.blur,
        )
        output = transform(raw, request, quality=args.quality)
        args.output.write_bytes(output)
    except ValidationError as e:
        logger.error(f"Invalid request: {e}")
        return 1
    except ImageProcessingError as e:
        logger.error(f"{args.input}: {e.message}")
        return 1
    except OSError as e:
        logger.error(f"Cannot write {args.output}: {e}")
        return 1

    width, height = get_dimensions(output)
    logger.info(f"Wrote {args.output} ({width}x{height} {request.format})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
