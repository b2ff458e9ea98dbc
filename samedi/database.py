"""A thin SQLite connection wrapper."""

from __future__ import annotations

import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class StorageError(Exception):
    """Raised when a storage operation fails."""


class SQLiteDB:
    """A single SQLite connection in WAL mode with a busy timeout."""

    def __init__(self, db_path: str | os.PathLike) -> None:
        try:
            self.connection = sqlite3.connect(
                db_path, timeout=5.0, isolation_level=None
            )
        except sqlite3.Error as exc:
            raise StorageError(f"failed to open database: {exc}") from exc

        try:
            self.connection.execute("PRAGMA journal_mode=WAL")
        except sqlite3.Error as exc:
            self.connection.close()
            raise StorageError(f"failed to ping database: {exc}") from exc

    def close(self) -> None:
        """Close the connection; closing twice is harmless."""
        self.connection.close()

    def __enter__(self) -> SQLiteDB:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @contextmanager
    def transaction(self) -> Iterator[SQLiteDB]:
        """Run the enclosed statements in a transaction.

        Commits on normal exit and rolls back if an exception escapes.
        """
        self.connection.execute("BEGIN")
        try:
            yield self
        except BaseException:
            if self.connection.in_transaction:
                self.connection.execute("ROLLBACK")
            raise
        else:
            self.connection.execute("COMMIT")

    def execute(self, query: str, *args: Any) -> sqlite3.Cursor:
        """Execute a statement and return its cursor."""
        return self.connection.execute(query, args)

    def query(self, query: str, *args: Any) -> list[tuple]:
        """Execute a query and return all rows."""
        return self.connection.execute(query, args).fetchall()

    def query_row(self, query: str, *args: Any) -> tuple | None:
        """Execute a query and return its first row, or None."""
        return self.connection.execute(query, args).fetchone()