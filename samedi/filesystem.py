"""File operations for plan and card documents."""

from __future__ import annotations

import os

from samedi.database import StorageError
from samedi.paths import Paths


class FilesystemStorage:
    """Reads, writes and removes plan and card files."""

    def __init__(self, paths: Paths) -> None:
        self.paths = paths

    def initialize(self) -> None:
        """Make sure all data directories exist."""
        self.paths.ensure_directories()

    def read_file(self, path: str | os.PathLike) -> bytes:
        """Return the contents of a file."""
        try:
            with open(path, "rb") as handle:
                return handle.read()
        except OSError as exc:
            raise StorageError(f"failed to read file {path}: {exc}") from exc

    def write_file(self, path: str | os.PathLike, data: bytes) -> None:
        """Write data to a file, creating it readable by the owner only."""
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
        except OSError as exc:
            raise StorageError(f"failed to write file {path}: {exc}") from exc

    def delete_file(self, path: str | os.PathLike) -> None:
        """Remove a file."""
        try:
            os.remove(path)
        except OSError as exc:
            raise StorageError(f"failed to delete file {path}: {exc}") from exc

    def file_exists(self, path: str | os.PathLike) -> bool:
        """Return True if something exists at the path."""
        return os.path.exists(path)