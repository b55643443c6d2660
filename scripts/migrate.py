"""Apply, revert or show schema migrations: migrate.py [up|down|status]."""

from __future__ import annotations

import argparse

from alembic import command

from review_loader.core.config import settings
from review_loader.core.logger import setup_json_logging, shutdown_logging
from review_loader.db.migrations import alembic_config


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "command", nargs="?", default="up",
        choices=["up", "down", "status", "history"],
    )
    parser.add_argument("--partitions", type=int, default=settings.partitions)
    parser.add_argument(
        "--sql", action="store_true",
        help="print the upgrade SQL instead of running it",
    )
    args = parser.parse_args()

    setup_json_logging(service=settings.app_name, level=settings.log_level)
    try:
        cfg = alembic_config(partitions=args.partitions)
        if args.command == "up":
            command.upgrade(cfg, "head", sql=args.sql)
        elif args.command == "down":
            command.downgrade(cfg, "-1")
        elif args.command == "status":
            command.current(cfg, verbose=True)
        else:
            command.history(cfg)
    finally:
        shutdown_logging()


if __name__ == "__main__":
    main()
