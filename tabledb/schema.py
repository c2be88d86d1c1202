"""Schema description and creation of the on-disk table layout."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from .linkedlist import LinkedList


@dataclass
class Table:
    """One table: its name and column names (without the primary key)."""

    name: str
    columns: list[str] = field(default_factory=list)


def _table_list() -> LinkedList[Table]:
    return LinkedList(key=lambda table: table.name)


@dataclass
class Database:
    """A schema: its name, the row limit per CSV file, and its tables."""

    name: str
    tuples_limit: int
    tables: LinkedList[Table] = field(default_factory=_table_list)
    base_dir: Path = field(default_factory=Path)

    def table_dir(self, table_name: str) -> Path:
        """Directory holding the files of ``table_name``."""
        return Path(self.base_dir) / self.name / table_name

    def csv_path(self, table_name: str, index: int) -> Path:
        """Path of the ``index``-th (1-based) CSV file of a table."""
        return self.table_dir(table_name) / f"{table_name}_{index}.csv"

    def has_table(self, table_name: str) -> bool:
        """Whether the schema defines ``table_name``."""
        return table_name in self.tables


def load_schema(config_path: str | Path) -> Database:
    """Read a JSON schema file into a Database."""
    with open(config_path, encoding="utf-8") as handle:
        schema = json.load(handle)
    db = Database(name=schema["name"], tuples_limit=int(schema["tuples_limit"]))
    for table_name, columns in schema["structure"].items():
        db.tables.append(Table(table_name, [str(column) for column in columns]))
    return db


def create_csv_file(table_dir: str | Path, table: Table) -> Path:
    """Write the first CSV file of a table containing only its header."""
    path = Path(table_dir) / f"{table.name}_1.csv"
    header = ",".join([f"{table.name}_pk", *table.columns])
    path.write_text(header + "\n", encoding="utf-8")
    return path


def create_primary_key_file(table_dir: str | Path, table_name: str) -> Path:
    """Write the primary key sequence file starting at 1."""
    path = Path(table_dir) / f"{table_name}_pk_sequence.txt"
    path.write_text("1", encoding="utf-8")
    return path


def create_lock_file(table_dir: str | Path, table_name: str) -> Path:
    """Write the lock file in the unlocked state."""
    path = Path(table_dir) / f"{table_name}_lock.txt"
    path.write_text("unlocked", encoding="utf-8")
    return path


def create_directories_and_files(db: Database) -> None:
    """Create the schema directory and, for every table, its initial files."""
    (Path(db.base_dir) / db.name).mkdir(parents=True, exist_ok=True)
    for table in db.tables:
        table_dir = db.table_dir(table.name)
        table_dir.mkdir(exist_ok=True)
        create_csv_file(table_dir, table)
        create_primary_key_file(table_dir, table.name)
        create_lock_file(table_dir, table.name)