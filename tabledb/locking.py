"""File-based table locks stored as a lock.txt file per table."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .schema import Database


class TableLockedError(RuntimeError):
    """Raised when a table is already locked."""


def _lock_path(db: Database, table_name: str) -> Path:
    return db.table_dir(table_name) / f"{table_name}_lock.txt"


def is_locked(db: Database, table_name: str) -> bool:
    """Whether the table is locked; an unreadable lock file counts as locked."""
    try:
        content = _lock_path(db, table_name).read_text(encoding="utf-8")
    except OSError:
        return True
    words = content.split()
    return bool(words) and words[0] == "locked"


def lock(db: Database, table_name: str) -> None:
    """Mark the table as locked."""
    _lock_path(db, table_name).write_text("locked", encoding="utf-8")


def unlock(db: Database, table_name: str) -> None:
    """Mark the table as unlocked."""
    _lock_path(db, table_name).write_text("unlocked", encoding="utf-8")


@contextmanager
def table_lock(db: Database, table_name: str) -> Iterator[None]:
    """Hold the table lock for the duration of the block."""
    if is_locked(db, table_name):
        raise TableLockedError("Table is locked")
    lock(db, table_name)
    try:
        yield
    finally:
        unlock(db, table_name)