import time
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


class RunSummary:
    """Collects per-item outcomes of one run and logs a summary footer."""

    def __init__(self):
        self.start_time = time.time()
        self.end_time: Optional[float] = None
        self.submitted = 0
        self.succeeded = 0
        self.failed = 0

    def record_submitted(self):
        self.submitted += 1

    def record_result(self, success: bool):
        if success:
            self.succeeded += 1
        else:
            self.failed += 1

    @property
    def completed(self) -> int:
        return self.succeeded + self.failed

    @property
    def duration(self) -> float:
        end = self.end_time if self.end_time is not None else time.time()
        return end - self.start_time

    def lines(self) -> List[str]:
        duration = self.duration
        throughput = (self.succeeded / duration) if duration > 0 else 0.0
        return [
            "=" * 60,
            "RUN SUMMARY",
            f"Duration   : {duration:.2f} seconds",
            f"Files      : {self.submitted}",
            f"Processed  : {self.succeeded}",
            f"Failed     : {self.failed}",
            f"Throughput : {throughput:.2f} images/sec",
            "=" * 60,
        ]

    def finalize(self):
        self.end_time = time.time()
        for line in self.lines():
            logger.info(line)
