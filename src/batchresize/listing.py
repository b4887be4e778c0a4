"""
listing.py - One-level enumeration of the input directory.
"""

__all__ = ["iter_regular_files", "check_input_dir",]

import os
import logging
from pathlib import Path
from typing import Iterator, Union

from .errors import DirReadError, InputNotDirError

PathLike = Union[str, os.PathLike]
logger = logging.getLogger(__name__)


def check_input_dir(input_dir: PathLike) -> Path:
    path = Path(input_dir)
    if not path.is_dir():
        raise InputNotDirError(f"Input path is no valid directory: {os.fspath(input_dir)}")
    return path


def iter_regular_files(input_dir: PathLike) -> Iterator[Path]:
    """
    Yield `input_dir/<name>` for every immediate child that is a regular file.

    Symlinks count when they resolve to a regular file; directories, broken
    links and special files are skipped. Does not recurse; order is whatever
    the filesystem returns.

    The directory is opened eagerly, so a missing or unreadable `input_dir`
    raises (InputNotDirError / DirReadError) on the call itself, before the
    first item is requested. Per-entry failures are logged and skipped.
    """
    path = check_input_dir(input_dir)
    try:
        it = os.scandir(path)
    except OSError as e:
        raise DirReadError(f"Failed reading directory {os.fspath(input_dir)}: {e}") from e
    return _iter_entries(path, it)


def _iter_entries(path: Path, it) -> Iterator[Path]:
    with it:
        while True:
            try:
                entry = next(it)
            except StopIteration:
                return
            except OSError as e:
                logger.error(f"Failed getting entry: {e}")
                continue

            try:
                is_file = entry.is_file(follow_symlinks=True)
            except OSError as e:
                logger.error(f"Failed getting file type of {entry.path}: {e}")
                continue

            if is_file:
                yield path / entry.name
