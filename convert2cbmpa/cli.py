"""Command-line entry point for image to bmpa conversion."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .core import ConversionSettings
from .core.errors import BmpaError
from .core.pipeline import convert

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="convert2cbmpa",
        description="Convert various image formats to the Collie bmpa format using Pillow.",
    )
    parser.add_argument("input", type=Path, nargs="?", help="Source image (any format Pillow can read)")
    parser.add_argument("output", type=Path, nargs="?", help="Destination bmpa file")
    parser.add_argument(
        "-i",
        "--info",
        type=Path,
        metavar="JSON_FILE",
        help="Information file with comment, grid, rotate point and animations",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print progress messages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.input is None or args.output is None:
        parser.print_help()
        return 0

    configure_logging(args.verbose)
    settings = ConversionSettings(
        input_path=args.input,
        output_path=args.output,
        metadata_path=args.info,
        verbose=args.verbose,
    )

    try:
        outcome = convert(settings)
    except BmpaError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code

    logger.info(
        "Converted %s -> %s (%sx%s, %s animations)",
        settings.input_path,
        outcome.output_path,
        outcome.width,
        outcome.height,
        outcome.animation_count,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
