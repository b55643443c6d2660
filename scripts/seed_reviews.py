"""Seed the reviews table with synthetic rows in fixed-size batches.

Ctrl+C stops the run after the batch currently being inserted.
"""

from __future__ import annotations

import logging
import signal
import threading

from review_loader.core.config import settings
from review_loader.core.errors import SinkFailure
from review_loader.core.logger import setup_json_logging, shutdown_logging
from review_loader.core.sentry import init_sentry
from review_loader.db.postgres import close_connection, get_connection
from review_loader.services.generator import ReviewGenerator
from review_loader.services.loader import BatchLoader
from review_loader.services.progress import LoggingProgressReporter
from review_loader.services.repositories.reviews_repo import PgReviewsSink

log = logging.getLogger("seed_reviews")


def main() -> int:
    setup_json_logging(service=settings.app_name, level=settings.log_level)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    cancel = threading.Event()
    signal.signal(signal.SIGINT, lambda *_: cancel.set())

    try:
        loader = BatchLoader(
            sink=PgReviewsSink(get_connection(), settings.insert_method),
            generator=ReviewGenerator(
                product_max=settings.product_max,
                user_max=settings.user_max,
            ),
            table=settings.target_table,
            batch_size=settings.batch_size,
            exact_count=settings.exact_count,
            progress=LoggingProgressReporter(every=10),
            cancel=cancel,
        )
        report = loader.run(settings.total_rows)
        print(
            f"[pg] inserted={report.rows_inserted} "
            f"batches={report.batches_completed}/{report.total_batches} "
            f"in {report.elapsed:.1f}s ({report.rate} rows/s)"
            + (" (cancelled)" if report.cancelled else ""),
        )
        return 0
    except SinkFailure as e:
        print(
            f"[pg] failed at batch_index={e.batch_index}: "
            f"{e.batches_completed} batches / {e.rows_inserted} rows "
            f"committed before the failure",
        )
        return 1
    finally:
        close_connection()
        shutdown_logging()


if __name__ == "__main__":
    raise SystemExit(main())
