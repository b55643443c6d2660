"""Postgres repository used as the loader's storage sink."""

from __future__ import annotations

from typing import Literal, Sequence

import psycopg
from psycopg import sql

from review_loader.models.reviews import REVIEW_COLUMNS, ReviewRecord


def table_ident(table: str) -> sql.Identifier:
    """Quote ``table`` or ``schema.table`` as an identifier."""
    return sql.Identifier(*table.split("."))


class PgReviewsSink:
    """Bulk-insert review batches, one transaction per batch.

    Each batch is committed before ``insert_batch`` returns, so a failure
    later in the run never takes earlier batches with it.
    """

    def __init__(
        self,
        conn: psycopg.Connection,
        method: Literal["insert", "copy"] = "insert",
    ) -> None:
        if method not in ("insert", "copy"):
            raise ValueError(f"unknown insert method: {method}")
        self.conn = conn
        self.method = method

    def insert_batch(
        self,
        table: str,
        records: Sequence[ReviewRecord],
    ) -> None:
        if not records:
            return
        with self.conn.transaction():
            with self.conn.cursor() as cur:
                if self.method == "copy":
                    self._copy(cur, table, records)
                else:
                    cur.executemany(
                        self.insert_stmt(table),
                        [r.as_row() for r in records],
                    )

    @staticmethod
    def insert_stmt(table: str) -> sql.Composed:
        placeholders = [sql.Placeholder()] * len(REVIEW_COLUMNS)
        return sql.SQL("INSERT INTO {} ({}) VALUES ({})").format(
            table_ident(table),
            sql.SQL(", ").join(map(sql.Identifier, REVIEW_COLUMNS)),
            sql.SQL(", ").join(placeholders),
        )

    @staticmethod
    def copy_stmt(table: str) -> sql.Composed:
        return sql.SQL("COPY {} ({}) FROM STDIN").format(
            table_ident(table),
            sql.SQL(", ").join(map(sql.Identifier, REVIEW_COLUMNS)),
        )

    def _copy(
        self,
        cur: psycopg.Cursor,
        table: str,
        records: Sequence[ReviewRecord],
    ) -> None:
        with cur.copy(self.copy_stmt(table)) as copy:
            for r in records:
                copy.write_row(r.as_row())

    def count(self, table: str) -> int:
        """Row count of ``table`` (exact, so slow on big tables)."""
        with self.conn.cursor() as cur:
            cur.execute(
                sql.SQL("SELECT COUNT(*) FROM {}").format(table_ident(table)),
            )
            row = cur.fetchone()
        return int(row[0]) if row else 0
