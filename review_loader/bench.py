"""Benchmark: read latency on reviews vs reviews_partitioned."""

from __future__ import annotations

import random
import time
from typing import Callable, Dict, List, Tuple

import psycopg
from psycopg import sql

from review_loader.services.repositories.reviews_repo import table_ident

TABLES = ("reviews", "reviews_partitioned")

# name -> (query template, takes a rating parameter)
QUERIES: Dict[str, Tuple[str, bool]] = {
    "by_product": (
        "SELECT id, user_id, rating FROM {} WHERE product_id = %s",
        False,
    ),
    "by_product_rating": (
        "SELECT id, user_id FROM {} WHERE product_id = %s AND rating = %s",
        True,
    ),
    "avg_rating": (
        "SELECT COUNT(*), AVG(rating) FROM {} WHERE product_id = %s",
        False,
    ),
}


def pct(values: List[float], p: float) -> float:
    """Return percentile (nearest-rank over sorted values)."""
    if not values:
        return 0.0
    values_sorted = sorted(values)
    idx = int(round((p / 100.0) * (len(values_sorted) - 1)))
    return values_sorted[idx]


def params_factory(
    with_rating: bool,
    product_max: int = 1000,
    rng: random.Random | None = None,
) -> Callable[[], tuple]:
    rng = rng or random.Random()

    def make() -> tuple:
        product_id = rng.randint(1, product_max)
        if with_rating:
            return (product_id, rng.randint(1, 5))
        return (product_id,)

    return make


def measure(
    conn: psycopg.Connection,
    query: sql.Composable,
    make_params: Callable[[], tuple],
    runs: int,
) -> List[float]:
    """Run ``query`` ``runs`` times and return per-run latency in seconds."""
    lat: List[float] = []
    with conn.cursor() as cur:
        for _ in range(runs):
            params = make_params()
            t0 = time.perf_counter()
            cur.execute(query, params)
            cur.fetchall()
            lat.append(time.perf_counter() - t0)
    return lat


def run_bench(
    conn: psycopg.Connection,
    runs: int,
    product_max: int = 1000,
    tables: Tuple[str, ...] = TABLES,
    seed: int | None = None,
) -> Dict[Tuple[str, str], List[float]]:
    """Measure every query in ``QUERIES`` against every table.

    The same parameter sequence is replayed on each table so results are
    comparable.
    """
    if seed is None:
        seed = random.randrange(2 ** 32)
    results: Dict[Tuple[str, str], List[float]] = {}
    for qname, (template, with_rating) in QUERIES.items():
        for table in tables:
            query = sql.SQL(template).format(table_ident(table))
            make = params_factory(
                with_rating, product_max, random.Random(seed),
            )
            results[(qname, table)] = measure(conn, query, make, runs)
    return results


def summarize(results: Dict[Tuple[str, str], List[float]]) -> List[str]:
    """Format p50/p95 lines, one per (query, table)."""
    lines = []
    for (qname, table), values in results.items():
        lines.append(
            f"{qname:<18} {table:<20} "
            f"p50={pct(values, 50) * 1000:7.2f} ms, "
            f"p95={pct(values, 95) * 1000:7.2f} ms, "
            f"n={len(values)}"
        )
    return lines
