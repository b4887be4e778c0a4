"""
logging_utils.py
"""

__all__ = ["configure_logging", "ColorFormatter", "parse_level", "TRACE", "OFF", "LOGGER_NAME",]

import os
import sys
import logging
from typing import Optional, TextIO, Union
from logging.handlers import RotatingFileHandler
from pathlib import Path

from colorama import Fore, Style, just_fix_windows_console

PathLike = Union[str, os.PathLike]
LOGGER_NAME = "batchresize"

TRACE = 5
OFF = logging.CRITICAL + 10
logging.addLevelName(TRACE, "TRACE")

_LEVELS = {
    "off":   OFF,
    "error": logging.ERROR,
    "warn":  logging.WARNING,
    "info":  logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}
LEVEL_NAMES = tuple(_LEVELS)


def parse_level(name: str) -> int:
    """Map a --loglevel name (case-insensitive) to a logging level."""
    try:
        return _LEVELS[name.lower()]
    except KeyError:
        raise ValueError(f"invalid log level {name!r}; expected one of {', '.join(LEVEL_NAMES)}") from None


class ColorFormatter(logging.Formatter):
    """Colorized console formatter."""
    COLORS = {
        "TRACE":    Fore.MAGENTA,
        "DEBUG":    Fore.CYAN,
        "INFO":     Fore.GREEN,
        "WARNING":  Fore.YELLOW,
        "ERROR":    Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def __init__(self, datefmt: Optional[str] = None, use_color: bool = True):
        super().__init__(datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "") if self.use_color else ""
        reset = Style.RESET_ALL if self.use_color else ""
        level_str = f"{record.levelname:<5s}"
        return (
            f"[{self.formatTime(record, self.datefmt)}] "
            f"[{record.threadName}] "
            f"[{color}{level_str}{reset}] "
            f"{record.getMessage()}"
        )


def configure_logging(level: int = logging.INFO,
                      log_file: Optional[PathLike] = None,
                      name: str = LOGGER_NAME,
                      stream: Optional[TextIO] = None) -> Optional[Path]:
    """
    Configure the package logger: colorized stderr console and, when
    `log_file` is given, a monochrome rotating file. Safe to call again;
    previously installed handlers are replaced.
    """
    stream = stream if stream is not None else sys.stderr
    use_color = hasattr(stream, "isatty") and stream.isatty()
    if use_color:
        just_fix_windows_console()

    mono_fmt = "[%(asctime)s] [%(threadName)s] [%(levelname)-5s] %(message)s"
    datefmt = "%H:%M:%S"

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    ch = logging.StreamHandler(stream)
    ch.setFormatter(ColorFormatter(datefmt=datefmt, use_color=use_color))
    logger.addHandler(ch)

    log_path = None
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5)
        fh.setFormatter(logging.Formatter(mono_fmt, datefmt))
        logger.addHandler(fh)

    logger.log(TRACE, f"Logging initialized - PID {os.getpid()}; file {log_path}")
    return log_path
