"""
main.py - Command-line entry point for batch image resizing.
"""

import logging
import argparse
from typing import Optional, Sequence

from . import __version__
from .config import DEFAULT_WORKERS, ResizeConfig
from .errors import ResizeError
from .logging_utils import LEVEL_NAMES, configure_logging, parse_level
from .orchestration import run

logger = logging.getLogger(__name__)

U32_MAX = 2 ** 32 - 1


def _u32(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from None
    if not 0 <= n <= U32_MAX:
        raise argparse.ArgumentTypeError(f"value out of range 0..{U32_MAX}: {value!r}")
    return n


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value!r}")
    return n


def _level_name(value: str) -> str:
    name = value.lower()
    if name not in LEVEL_NAMES:
        raise argparse.ArgumentTypeError(
            f"invalid log level {value!r}; expected one of {', '.join(LEVEL_NAMES)}")
    return name


def build_parser() -> argparse.ArgumentParser:
    # -h is taken by --height
    parser = argparse.ArgumentParser(
        prog="batch-resize",
        description="Resize every image of a directory into an output directory.",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-s", "--scale", type=float,
                        help="The scale of the results")
    parser.add_argument("-w", "--width", type=_u32,
                        help="The width of the results in px")
    parser.add_argument("-h", "--height", type=_u32,
                        help="The height of the results in px")
    parser.add_argument("-i", "--input", default=".",
                        help="The directory of the input data (default: %(default)s)")
    parser.add_argument("-o", "--output", default="output",
                        help="The directory of the output data (default: %(default)s)")
    parser.add_argument("--workers", type=_positive_int, default=DEFAULT_WORKERS,
                        help="Amount of workers in the worker pool (default: %(default)s)")
    parser.add_argument("-f", "--filter", default="triangle",
                        help="The filter used to scale the images: nearest, triangle, "
                             "catmullrom, gaussian or lanczos3 (default: %(default)s)")
    parser.add_argument("--loglevel", type=_level_name, default="info",
                        help=f"Log level: {', '.join(LEVEL_NAMES)} (default: %(default)s)")
    parser.add_argument("--log-file", default=None,
                        help="Also write the log to this rotating file")
    parser.add_argument("--strict", action="store_true",
                        help="Exit with status 1 if any file failed")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run the batch and return the process exit status."""
    args = build_parser().parse_args(argv)
    configure_logging(level=parse_level(args.loglevel), log_file=args.log_file)

    try:
        config = ResizeConfig.from_args(args)
        summary = run(config)
    except ResizeError as e:
        logger.error(f"FATAL: {e}")
        return 1

    if config.strict and summary.failed:
        logger.error(f"{summary.failed} of {summary.submitted} files failed")
        return 1
    return 0

