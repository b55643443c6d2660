import os

import pytest

from tests.helpers import MemorySink, RecordingReporter, make_generator


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def generator():
    return make_generator()


@pytest.fixture
def pg_conn():
    """Live Postgres connection; skipped unless PG_DSN is set."""
    dsn = os.getenv("PG_DSN")
    if not dsn:
        pytest.skip("PG_DSN not set")
    psycopg = pytest.importorskip("psycopg")
    with psycopg.connect(dsn, autocommit=True) as conn:
        yield conn
