import logging

import psycopg

from review_loader.core.config import settings

_conn: psycopg.Connection | None = None


def connect(dsn: str | None = None, **kwargs) -> psycopg.Connection:
    """Open a new psycopg connection (defaults to settings.pg_dsn).

    Autocommit is on unless asked otherwise: writers group statements
    with ``conn.transaction()`` blocks, which then map to real commits.
    """
    kwargs.setdefault("autocommit", True)
    return psycopg.connect(
        dsn or settings.pg_dsn,
        application_name=settings.app_name,
        connect_timeout=5,
        **kwargs,
    )


def get_connection() -> psycopg.Connection:
    """
    Shared connection for scripts; the loader is its only writer.
    """
    global _conn
    if _conn is None or _conn.closed:
        _conn = connect()
        logging.getLogger(__name__).info(
            "pg_connected",
            extra={"server_version": _conn.info.server_version})
    return _conn


def close_connection() -> None:
    global _conn
    if _conn is not None:
        _conn.close()
        _conn = None
