"""Schema migrations read from a directory of numbered SQL files."""

from __future__ import annotations

import os
import sqlite3
from dataclasses import dataclass
from pathlib import Path

from samedi.database import SQLiteDB, StorageError


@dataclass(frozen=True)
class Migration:
    """One schema migration."""

    version: int
    name: str
    sql: str


def load_migrations(directory: str | os.PathLike) -> list[Migration]:
    """Load migrations named like ``001_initial_schema.sql``, sorted by version.

    Directories, files without a ``.sql`` suffix and files whose name does
    not start with a number followed by an underscore are ignored.
    """
    try:
        entries = sorted(Path(directory).iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise StorageError(f"failed to read migrations directory: {exc}") from exc

    migrations = []
    for entry in entries:
        if entry.is_dir() or not entry.name.endswith(".sql"):
            continue

        prefix, sep, rest = entry.name.partition("_")
        if not sep:
            continue
        try:
            version = int(prefix)
        except ValueError:
            continue

        try:
            sql = entry.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"failed to read migration {entry.name}: {exc}") from exc

        migrations.append(
            Migration(version=version, name=rest.removesuffix(".sql"), sql=sql)
        )

    migrations.sort(key=lambda migration: migration.version)
    return migrations


class Migrator:
    """Applies pending migrations to a database."""

    def __init__(self, db: SQLiteDB, migrations_dir: str | os.PathLike) -> None:
        self._db = db
        self._migrations_dir = migrations_dir

    def current_version(self) -> int:
        """Return the highest applied migration version, or 0."""
        try:
            (table_exists,) = self._db.query_row(
                "SELECT COUNT(*) > 0 FROM sqlite_master "
                "WHERE type='table' AND name='schema_migrations'"
            )
        except sqlite3.Error as exc:
            raise StorageError(
                f"failed to check schema_migrations table: {exc}"
            ) from exc

        if not table_exists:
            return 0

        try:
            (version,) = self._db.query_row(
                "SELECT COALESCE(MAX(version), 0) FROM schema_migrations"
            )
        except sqlite3.Error as exc:
            raise StorageError(f"failed to get current version: {exc}") from exc
        return version

    def migrate(self) -> None:
        """Apply every migration newer than the current version, in order."""
        try:
            current = self.current_version()
        except StorageError as exc:
            raise StorageError(f"failed to get current version: {exc}") from exc

        try:
            migrations = load_migrations(self._migrations_dir)
        except StorageError as exc:
            raise StorageError(f"failed to load migrations: {exc}") from exc

        for migration in migrations:
            if migration.version <= current:
                continue
            try:
                self._apply(migration)
            except StorageError as exc:
                raise StorageError(
                    f"failed to apply migration {migration.version}: {exc}"
                ) from exc

    def _apply(self, migration: Migration) -> None:
        conn = self._db.connection
        try:
            try:
                conn.executescript("BEGIN;\n" + migration.sql)
            except sqlite3.Error as exc:
                raise StorageError(f"failed to execute migration SQL: {exc}") from exc

            # A migration may record itself; only record it if it did not.
            try:
                (recorded,) = conn.execute(
                    "SELECT EXISTS(SELECT 1 FROM schema_migrations WHERE version = ?)",
                    (migration.version,),
                ).fetchone()
            except sqlite3.Error as exc:
                raise StorageError(
                    f"failed to check if migration is recorded: {exc}"
                ) from exc

            if not recorded:
                try:
                    conn.execute(
                        "INSERT INTO schema_migrations (version) VALUES (?)",
                        (migration.version,),
                    )
                except sqlite3.Error as exc:
                    raise StorageError(f"failed to record migration: {exc}") from exc

            try:
                conn.execute("COMMIT")
            except sqlite3.Error as exc:
                raise StorageError(f"failed to commit transaction: {exc}") from exc
        finally:
            if conn.in_transaction:
                conn.execute("ROLLBACK")