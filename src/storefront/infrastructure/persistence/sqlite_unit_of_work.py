"""SQLite unit of work.

Each ``with uow:`` block runs on its own connection inside
``BEGIN IMMEDIATE``: the database write lock is taken up front, so
concurrent units of work serialize instead of interleaving their
stock checks and decrements. Waiting for the lock is bounded by
``timeout``; a timed-out or failed block leaves no partial effect.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence import schema
from storefront.infrastructure.persistence.sqlite_order_repository import SqliteOrderRepository
from storefront.infrastructure.persistence.sqlite_product_repository import (
    SqliteProductRepository,
)


class SqliteUnitOfWork(UnitOfWork):

    def __init__(self, db_path: Path, timeout: float = 5.0) -> None:
        self._db_path = Path(db_path)
        self._timeout = timeout
        self._conn: sqlite3.Connection | None = None
        self._ensure_schema()

    def begin(self) -> None:
        if self._conn is not None:
            raise RuntimeError("Unit of work is already in progress")
        conn = self._connect()
        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.Error:
            conn.close()
            raise
        self._conn = conn
        self.products = SqliteProductRepository(conn)
        self.orders = SqliteOrderRepository(conn)

    def commit(self) -> None:
        conn = self._require_conn()
        try:
            conn.execute("COMMIT")
        except sqlite3.Error:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        finally:
            self._close()

    def rollback(self) -> None:
        conn = self._require_conn()
        try:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
        finally:
            self._close()

    # --- Connection helpers ---------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        # Autocommit mode: transactions are controlled explicitly above.
        conn = sqlite3.connect(self._db_path, timeout=self._timeout, isolation_level=None)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _require_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("No unit of work in progress")
        return self._conn

    def _close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _ensure_schema(self) -> None:
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            schema.initialize(conn)
        finally:
            conn.close()
