"""Filesystem locations used for plans, cards, templates and the database."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path

from samedi.database import StorageError


@dataclass
class Paths:
    """All filesystem paths for samedi data."""

    base_dir: str = ""
    plans_dir: str = ""
    cards_dir: str = ""
    templates_dir: str = ""
    backup_dir: str = ""
    database_path: str = ""
    config_path: str = ""

    def ensure_directories(self) -> None:
        """Create every required directory that does not exist yet."""
        for directory in (
            self.base_dir,
            self.plans_dir,
            self.cards_dir,
            self.templates_dir,
            self.backup_dir,
        ):
            if not directory:
                continue
            try:
                os.makedirs(directory, mode=0o755, exist_ok=True)
            except OSError as exc:
                raise StorageError(
                    f"failed to create directory {directory}: {exc}"
                ) from exc

    def exists(self) -> bool:
        """Return True if the base, plans and cards directories all exist."""
        return all(
            os.path.exists(directory)
            for directory in (self.base_dir, self.plans_dir, self.cards_dir)
        )

    def clean(self) -> None:
        """Remove the base data directory and everything below it."""
        if not self.base_dir or not os.path.lexists(self.base_dir):
            return
        try:
            if os.path.isdir(self.base_dir) and not os.path.islink(self.base_dir):
                shutil.rmtree(self.base_dir)
            else:
                os.remove(self.base_dir)
        except OSError as exc:
            raise StorageError(f"failed to remove base directory: {exc}") from exc

    def plan_path(self, plan_id: str) -> str:
        """Path of the markdown file for a plan."""
        return os.path.join(self.plans_dir, f"{plan_id}.md")

    def cards_path(self, plan_id: str) -> str:
        """Path of the cards markdown file for a plan."""
        return os.path.join(self.cards_dir, f"{plan_id}.cards.md")

    def template_path(self, template_name: str) -> str:
        """Path of a template file."""
        return os.path.join(self.templates_dir, f"{template_name}.md")


def default_paths() -> Paths:
    """Return the default paths rooted in the user's home directory."""
    try:
        home = str(Path.home())
    except (RuntimeError, KeyError) as exc:
        raise StorageError(f"failed to get home directory: {exc}") from exc

    base_dir = os.path.join(home, ".samedi")
    return Paths(
        base_dir=base_dir,
        plans_dir=os.path.join(base_dir, "plans"),
        cards_dir=os.path.join(base_dir, "cards"),
        templates_dir=os.path.join(base_dir, "templates"),
        backup_dir=os.path.join(home, "samedi-backups"),
        database_path=os.path.join(base_dir, "sessions.db"),
        config_path=os.path.join(base_dir, "config.toml"),
    )