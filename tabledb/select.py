"""SELECT over the first two tables of a schema: cross join and filtered join."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Sequence

from .conditions import _read_csv, clean_string, count_csv_files, evaluate
from .schema import Database, Table


def _first_two_tables(db: Database) -> tuple[Table, Table]:
    if len(db.tables) < 2:
        raise ValueError("schema needs at least two tables")
    return db.tables[0], db.tables[1]


def _table_files(db: Database, table_name: str) -> Iterator[Path]:
    for number in range(1, count_csv_files(db, table_name) + 1):
        yield db.csv_path(table_name, number)


def _column_index(header: list[str], column: str) -> int:
    if column not in header:
        raise ValueError(f"Column wasn't found: {column}")
    return header.index(column)


def cross_join(db: Database, columns: Sequence[str]) -> list[str]:
    """Pair every row of the first table with every row of the second.

    ``columns`` names one column of each table; every output line shows the
    primary key and that column's value for both rows.
    """
    first, second = _first_two_tables(db)
    column1, column2 = (clean_string(column) for column in columns)
    lines: list[str] = []
    for path1 in _table_files(db, first.name):
        header1, rows1 = _read_csv(path1)
        index1 = _column_index(header1, column1)
        for row1 in rows1:
            for path2 in _table_files(db, second.name):
                header2, rows2 = _read_csv(path2)
                index2 = _column_index(header2, column2)
                lines.extend(
                    f"{row1[0]}: {row1[index1]}  |   {row2[0]}: {row2[index2]}"
                    for row2 in rows2
                )
    return lines


def select_where(db: Database, query: str, tables: Sequence[str]) -> list[str]:
    """Pairs of rows from the first two tables for which ``query`` holds.

    ``tables`` holds the first and second table named in the query; each
    output line shows both rows in full, separated by ``|``.
    """
    first, second = _first_two_tables(db)
    lines: list[str] = []
    for path1 in _table_files(db, first.name):
        _, rows1 = _read_csv(path1)
        for row_index1, row1 in enumerate(rows1):
            for path2 in _table_files(db, second.name):
                _, rows2 = _read_csv(path2)
                for row_index2, row2 in enumerate(rows2):
                    if evaluate(db, query, tables, row_index1, row_index2):
                        left = "".join(f"{cell} " for cell in row1)
                        right = "".join(f"{cell}  " for cell in row2)
                        lines.append(f"{left}| {right}")
    return lines