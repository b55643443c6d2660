"""Alembic wiring for the reviews schema.

Revisions live in ``review_loader/db/alembic/versions``. The number of
hash partitions for ``reviews_partitioned`` is read from the Alembic
config attributes (set by ``alembic_config``), then from the
``partitions`` ini option, then from ``settings.partitions``.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, Optional

from alembic.config import Config

from review_loader.core.config import settings
from review_loader.core.errors import ConfigurationError

SCRIPT_LOCATION = Path(__file__).resolve().parent / "alembic"


def sqlalchemy_url(dsn: str) -> str:
    """Point a libpq-style DSN at SQLAlchemy's psycopg 3 dialect."""
    for scheme in ("postgresql://", "postgres://"):
        if dsn.startswith(scheme):
            return "postgresql+psycopg://" + dsn[len(scheme):]
    return dsn


def alembic_config(
    dsn: Optional[str] = None,
    partitions: Optional[int] = None,
    output_buffer: Optional[IO[str]] = None,
) -> Config:
    """Build an Alembic config without needing alembic.ini on disk."""
    cfg = Config(output_buffer=output_buffer)
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    # configparser interpolation: escape % in url-encoded passwords
    cfg.set_main_option(
        "sqlalchemy.url",
        sqlalchemy_url(dsn or settings.pg_dsn).replace("%", "%%"),
    )
    cfg.attributes["partitions"] = check_partitions(
        partitions if partitions is not None else settings.partitions
    )
    return cfg


def check_partitions(n: int) -> int:
    if n < 1:
        raise ConfigurationError(f"invalid_partitions: {n}")
    return n


def partition_count(cfg: Config) -> int:
    n = cfg.attributes.get("partitions")
    if n is None:
        n = int(cfg.get_main_option("partitions") or settings.partitions)
    return check_partitions(int(n))


def partition_name(i: int) -> str:
    return f"reviews_partitioned_p{i}"
