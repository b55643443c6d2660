"""Benchmark: product lookups on reviews vs reviews_partitioned."""

from __future__ import annotations

import os

from review_loader.bench import run_bench, summarize
from review_loader.core.config import settings
from review_loader.db.postgres import connect

RUNS = int(os.getenv("RUNS", str(settings.bench_runs)))
SEED = int(os.getenv("SEED", "42"))


def main() -> None:
    """Run the query set on both tables and print p50/p95."""
    print(f"RUNS={RUNS}, PRODUCT_MAX={settings.product_max}")
    with connect(autocommit=True) as conn:
        results = run_bench(
            conn,
            runs=RUNS,
            product_max=settings.product_max,
            seed=SEED,
        )
    for line in summarize(results):
        print(line)


if __name__ == "__main__":
    main()
