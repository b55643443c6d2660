"""Progress reporters for the batch loader."""

from __future__ import annotations

import logging
from typing import Protocol

log = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    def report(self, batch_index: int, total_batches: int) -> None:
        ...


class LoggingProgressReporter:
    """Log every ``every``-th batch (and always the last one)."""

    def __init__(self, every: int = 1) -> None:
        self.every = max(1, every)

    def report(self, batch_index: int, total_batches: int) -> None:
        done = batch_index + 1
        if done % self.every and done != total_batches:
            return
        log.info(
            "batch_inserted",
            extra={
                "batch_index": batch_index,
                "batches_completed": done,
                "total_batches": total_batches,
            },
        )


class NullProgressReporter:
    def report(self, batch_index: int, total_batches: int) -> None:
        return None
