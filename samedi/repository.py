"""Storage records, query filters and the combined storage object."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime

from samedi.database import SQLiteDB
from samedi.filesystem import FilesystemStorage
from samedi.migrator import Migrator
from samedi.paths import Paths


@dataclass(kw_only=True)
class PlanRecord:
    """Metadata row for a learning plan."""

    id: str
    title: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    total_hours: float = 0.0
    status: str = ""
    tags: list[str] = field(default_factory=list)
    file_path: str = ""


@dataclass(kw_only=True)
class PlanFilter:
    """Optional filtering when listing plans."""

    ids: list[str] = field(default_factory=list)
    statuses: list[str] = field(default_factory=list)
    tag: str = ""
    sort_by: str = ""


@dataclass(kw_only=True)
class SessionRecord:
    """A row of the sessions table."""

    id: str
    plan_id: str = ""
    chunk_id: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_minutes: int = 0
    notes: str = ""
    artifacts: list[str] = field(default_factory=list)
    cards_created: int = 0
    created_at: datetime | None = None


@dataclass(kw_only=True)
class SessionFilter:
    """Options for querying sessions."""

    plan_id: str = ""
    chunk_id: str = ""
    active: bool = False
    limit: int = 0
    since_time: datetime | None = None


@dataclass(kw_only=True)
class CardRecord:
    """A flashcard with its spaced repetition state."""

    id: str
    plan_id: str = ""
    chunk_id: str = ""
    question: str = ""
    answer: str = ""
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    ease_factor: float = 0.0
    interval_days: int = 0
    repetitions: int = 0
    next_review: datetime | None = None
    last_review: datetime | None = None


@dataclass(kw_only=True)
class CardFilter:
    """Options for selecting cards to review."""

    plan_id: str = ""
    due_before: datetime | None = None
    tags: list[str] = field(default_factory=list)
    limit: int = 0


class Storage:
    """The database and filesystem storage together.

    Opening migrates the database and creates the data directories.
    """

    def __init__(
        self,
        db_path: str | os.PathLike,
        paths: Paths,
        migrations_dir: str | os.PathLike,
    ) -> None:
        self.db = SQLiteDB(db_path)
        try:
            Migrator(self.db, migrations_dir).migrate()
            self.filesystem = FilesystemStorage(paths)
            self.filesystem.initialize()
        except BaseException:
            self.db.close()
            raise
        self.paths = paths

    def close(self) -> None:
        """Close the database connection."""
        self.db.close()

    def __enter__(self) -> Storage:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()