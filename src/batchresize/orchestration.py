"""
orchestration.py - Dispatch of per-file resize jobs onto a thread pool.
"""

import os
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Tuple

from .config import ResizeConfig
from .errors import OutputSetupError
from .listing import check_input_dir, iter_regular_files
from .summary import RunSummary
from .worker import WorkItem, process_image

logger = logging.getLogger(__name__)

WorkResult = Tuple[Path, Optional[Path], Optional[Exception]]


def main_worker(item: WorkItem) -> WorkResult:
    """Execute one resize job and return (input, output, error)."""
    in_path = Path(item.input_path)
    try:
        out = process_image(item)
    except Exception as e:
        logger.error(f"Failed processing {os.fspath(item.input_path)}: {e}")
        return in_path, None, e
    logger.info(f"Processed image {os.fspath(item.input_path)}")
    return in_path, out, None


def ensure_output_dir(output_dir: Path) -> None:
    """Create `output_dir` with all parents unless it already exists."""
    if output_dir.is_dir():
        return
    if output_dir.exists():
        raise OutputSetupError(f"Output path exists and is not a directory: {output_dir}")
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputSetupError(f"Failed creating output dir {output_dir}: {e}") from e
    logger.info("Output dir created")


def run(config: ResizeConfig) -> RunSummary:
    """
    Resize every regular file of config.input_dir into config.output_dir.

    Setup failures (input dir, output dir) raise before any worker starts.
    Per-file failures are logged by the workers and only counted here.
    """
    check_input_dir(config.input_dir)
    ensure_output_dir(config.output_dir)
    files = iter_regular_files(config.input_dir)

    summary = RunSummary()
    logger.debug(f"Using {config.workers} workers; config: {config}")

    with ThreadPoolExecutor(max_workers=config.workers, thread_name_prefix="resize") as pool:
        futures = []
        for path in files:
            item = WorkItem(
                input_path=path,
                output_dir=config.output_dir,
                sizing=config.sizing,
                filter=config.filter,
            )
            futures.append(pool.submit(main_worker, item))
            summary.record_submitted()

        for fut in as_completed(futures):
            _, _, err = fut.result()
            summary.record_result(success=(err is None))

    summary.finalize()
    return summary
