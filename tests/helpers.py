import random
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from review_loader.models.reviews import ReviewRecord
from review_loader.services.generator import ReviewGenerator

FIXED_NOW = datetime(2025, 10, 25, 17, 5, 30, tzinfo=timezone.utc)


def make_generator(seed: int = 42, **kwargs) -> ReviewGenerator:
    return ReviewGenerator(
        rng=random.Random(seed), clock=lambda: FIXED_NOW, **kwargs
    )


def make_records(n: int, seed: int = 42, **kwargs) -> List[ReviewRecord]:
    gen = make_generator(seed, **kwargs)
    return [gen() for _ in range(n)]


class CountingGenerator:
    """Wrap a generator and count how many records it has produced."""

    def __init__(self, inner=None) -> None:
        self.inner = inner or make_generator()
        self.produced = 0

    def __call__(self) -> ReviewRecord:
        self.produced += 1
        return self.inner()


class MemorySink:
    """In-memory storage sink: remembers every submitted batch."""

    def __init__(self) -> None:
        self.batches: List[Tuple[str, List[ReviewRecord]]] = []

    def insert_batch(self, table: str, records: Sequence[ReviewRecord]):
        self.batches.append((table, list(records)))

    @property
    def sizes(self) -> List[int]:
        return [len(rows) for _, rows in self.batches]

    def rows(self, table: str = "reviews") -> int:
        return sum(len(r) for t, r in self.batches if t == table)


class FailingSink(MemorySink):
    """Raise on the ``fail_at``-th call (0-based); count every attempt."""

    def __init__(self, fail_at: int,
                 error: Optional[Exception] = None) -> None:
        super().__init__()
        self.fail_at = fail_at
        self.error = error or ConnectionError("connection lost")
        self.attempts = 0

    def insert_batch(self, table, records):
        attempt = self.attempts
        self.attempts += 1
        if attempt == self.fail_at:
            raise self.error
        super().insert_batch(table, records)


class ObservingSink(MemorySink):
    """Record the generator's output count at every insert."""

    def __init__(self, generator: CountingGenerator) -> None:
        super().__init__()
        self.generator = generator
        self.produced_at_insert: List[int] = []

    def insert_batch(self, table, records):
        self.produced_at_insert.append(self.generator.produced)
        super().insert_batch(table, records)


class RecordingReporter:
    def __init__(self, cancel_after: Optional[int] = None,
                 cancel: Optional[threading.Event] = None) -> None:
        self.calls: List[Tuple[int, int]] = []
        self.cancel_after = cancel_after
        self.cancel = cancel

    def report(self, batch_index: int, total_batches: int) -> None:
        self.calls.append((batch_index, total_batches))
        if self.cancel is not None and batch_index == self.cancel_after:
            self.cancel.set()


# --------------------------- fake psycopg ------------------------------------


class FakeCopy:
    def __init__(self, conn: "FakeConnection", stmt) -> None:
        self.conn = conn
        self.stmt = stmt

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def write_row(self, row) -> None:
        self.conn.copied.append(row)


class FakeCursor:
    """Just enough of psycopg.Cursor for the repositories."""

    def __init__(self, conn: "FakeConnection") -> None:
        self.conn = conn
        self._rows: list = []

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, query, params=None):
        self.conn.executed.append((query, params))
        text = query.strip() if isinstance(query, str) else ""
        if self.conn.fail_on and self.conn.fail_on in text:
            raise RuntimeError(f"boom: {self.conn.fail_on}")
        self._rows = list(self.conn.results)

    def executemany(self, query, params_seq):
        if self.conn.fail_on == "executemany":
            raise RuntimeError("boom: executemany")
        self.conn.executed_many.append((query, list(params_seq)))

    def fetchall(self):
        return self._rows

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def copy(self, stmt):
        return FakeCopy(self.conn, stmt)


class FakeConnection:
    def __init__(self, results=None, fail_on: Optional[str] = None) -> None:
        self.results = results or []
        self.fail_on = fail_on
        self.executed: list = []
        self.executed_many: list = []
        self.copied: list = []
        self.commits = 0
        self.rollbacks = 0

    def cursor(self):
        return FakeCursor(self)

    @contextmanager
    def transaction(self):
        try:
            yield
        except Exception:
            self.rollbacks += 1
            raise
        self.commits += 1
