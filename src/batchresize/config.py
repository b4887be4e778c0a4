"""
config.py - Run configuration for the batch resizer.

Built once from the parsed command line, validated, and then shared
read-only by the dispatcher and (through WorkItems) by every worker.
"""

import math
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional

from .dimensions import Sizing
from .errors import ConfigMissingError, InvalidScaleError, InvalidWorkersError
from .filters import ResizeFilter
from .logging_utils import parse_level

DEFAULT_WORKERS = 5


@dataclass(frozen=True)
class ResizeConfig:
    """Immutable, validated configuration for one run."""
    input_dir: Path = Path(".")
    output_dir: Path = Path("output")
    sizing: Sizing = field(default_factory=Sizing)
    filter: ResizeFilter = ResizeFilter.TRIANGLE
    workers: int = DEFAULT_WORKERS
    log_level: int = logging.INFO
    log_file: Optional[Path] = None
    strict: bool = False

    def __post_init__(self):
        if self.sizing.is_empty:
            raise ConfigMissingError()
        scale = self.sizing.scale
        if scale is not None and (not math.isfinite(scale) or scale < 0):
            raise InvalidScaleError(f"Scale must be a finite non-negative number; got {scale}")
        if self.workers < 1:
            raise InvalidWorkersError(f"Worker count must be at least 1; got {self.workers}")

    @classmethod
    def from_args(cls, args) -> "ResizeConfig":
        """Build from an argparse namespace produced by main.build_parser()."""
        config = cls(
            input_dir=Path(args.input),
            output_dir=Path(args.output),
            sizing=Sizing(scale=args.scale, width=args.width, height=args.height),
            workers=args.workers,
            log_level=parse_level(args.loglevel),
            log_file=Path(args.log_file) if args.log_file else None,
            strict=args.strict,
        )
        # filter resolved last: a missing size is reported before a bad filter name
        return replace(config, filter=ResizeFilter.from_name(args.filter))
