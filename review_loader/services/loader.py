"""Batch loader: generate synthetic reviews and insert them batch by batch."""

from __future__ import annotations

import logging
import re
import threading
import time
import uuid
from typing import Callable, Optional, Protocol, Sequence

from review_loader.core.errors import ConfigurationError, SinkFailure
from review_loader.core.trace import set_run_id
from review_loader.models.reviews import LoadReport, ReviewRecord
from review_loader.services.progress import (
    NullProgressReporter,
    ProgressReporter,
)

log = logging.getLogger(__name__)

MAX_BATCH_SIZE = 100_000

_TABLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class StorageSink(Protocol):
    def insert_batch(
        self,
        table: str,
        records: Sequence[ReviewRecord],
    ) -> None:
        ...


def count_batches(total_rows: int, batch_size: int) -> int:
    """ceil(total_rows / batch_size) in integer arithmetic."""
    return (total_rows + batch_size - 1) // batch_size


def batch_rows(
    batch_index: int,
    total_rows: int,
    batch_size: int,
    exact_count: bool = True,
) -> int:
    """Return the size of batch ``batch_index`` for a run.

    With ``exact_count`` the last batch is clamped to the remainder;
    otherwise every batch is full and the run may overshoot ``total_rows``
    by up to ``batch_size - 1`` rows.
    """
    if not exact_count:
        return batch_size
    return min(batch_size, total_rows - batch_index * batch_size)


class BatchLoader:
    """Drive the generate-and-insert loop one bounded batch at a time.

    Only one batch buffer is alive at any moment. Batches are submitted
    strictly in order; a failing insert aborts the run with
    ``SinkFailure`` and leaves earlier batches in place. ``cancel`` is
    honoured between batches, never in the middle of one.
    """

    def __init__(
        self,
        sink: StorageSink,
        generator: Callable[[], ReviewRecord],
        table: str = "reviews",
        batch_size: int = 10_000,
        exact_count: bool = True,
        progress: Optional[ProgressReporter] = None,
        cancel: Optional[threading.Event] = None,
    ) -> None:
        if not 1 <= batch_size <= MAX_BATCH_SIZE:
            raise ConfigurationError(
                f"invalid_batch_size: {batch_size} "
                f"(expected 1..{MAX_BATCH_SIZE})"
            )
        if not _TABLE_RE.match(table):
            raise ConfigurationError(f"invalid_table: {table!r}")
        self.sink = sink
        self.generator = generator
        self.table = table
        self.batch_size = batch_size
        self.exact_count = exact_count
        self.progress = progress or NullProgressReporter()
        self.cancel = cancel or threading.Event()

    def run(self, total_rows: int) -> LoadReport:
        """Insert ``total_rows`` generated records and report what happened."""
        if total_rows < 0:
            raise ConfigurationError(f"invalid_total_rows: {total_rows}")

        report = LoadReport(
            total_batches=count_batches(total_rows, self.batch_size),
        )

        set_run_id(uuid.uuid4().hex)
        log.info(
            "load_started",
            extra={
                "table": self.table,
                "total_rows": total_rows,
                "batch_size": self.batch_size,
                "total_batches": report.total_batches,
                "exact_count": self.exact_count,
            },
        )

        t0 = time.perf_counter()
        for batch_index in range(report.total_batches):
            if self.cancel.is_set():
                report.cancelled = True
                log.warning(
                    "load_cancelled",
                    extra={
                        "batches_completed": report.batches_completed,
                        "rows_inserted": report.rows_inserted,
                    },
                )
                break

            size = batch_rows(
                batch_index, total_rows, self.batch_size, self.exact_count,
            )
            rows = [self.generator() for _ in range(size)]
            try:
                self.sink.insert_batch(self.table, rows)
            except Exception as e:
                log.error(
                    "batch_failed",
                    extra={
                        "batch_index": batch_index,
                        "batches_completed": report.batches_completed,
                        "rows_inserted": report.rows_inserted,
                        "err": str(e),
                    },
                )
                raise SinkFailure(
                    batch_index=batch_index,
                    batches_completed=report.batches_completed,
                    rows_inserted=report.rows_inserted,
                    reason=str(e),
                ) from e
            del rows

            report.batches_completed += 1
            report.rows_inserted += size
            self.progress.report(batch_index, report.total_batches)

        report.elapsed = time.perf_counter() - t0
        if not report.cancelled:
            log.info(
                "load_finished",
                extra={
                    "rows_inserted": report.rows_inserted,
                    "batches_completed": report.batches_completed,
                    "elapsed_s": round(report.elapsed, 3),
                    "rows_per_s": report.rate,
                },
            )
        return report
