"""Helpers for parsing query fragments and evaluating WHERE conditions."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence

from .schema import Database


def _read_csv(path: str | Path) -> tuple[list[str], list[list[str]]]:
    """Return the header and the data rows of a CSV file."""
    with open(path, newline="", encoding="utf-8") as handle:
        rows = [row for row in csv.reader(handle) if row]
    if not rows:
        return [], []
    return rows[0], rows[1:]


def _write_csv(path: str | Path, header: list[str], rows: list[list[str]]) -> None:
    """Write a header and data rows to a CSV file."""
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(rows)


def _first_token(path: str | Path) -> str:
    """The first whitespace-delimited word of a file, or an empty string."""
    words = Path(path).read_text(encoding="utf-8").split(maxsplit=1)
    return words[0] if words else ""


def split_point(word: str) -> tuple[str, str]:
    """Split ``table.column`` into its table and column names."""
    table, dot, column = word.partition(".")
    if not dot:
        raise ValueError(f"Incorrect format: {word}")
    return table, column


def clean_string(text: str) -> str:
    """Drop one trailing comma, surrounding quotes, then spaces and tabs."""
    cleaned = text
    if cleaned.endswith(","):
        cleaned = cleaned[:-1]
    if cleaned and cleaned[0] in "'\"" and cleaned[-1] in "'\"":
        cleaned = cleaned[1:-1]
    return cleaned.strip(" \t")


def has_dot(text: str) -> bool:
    """Whether ``text`` contains a dot, i.e. looks like ``table.column``."""
    return "." in text


def count_csv_files(db: Database, table_name: str) -> int:
    """Number of consecutively numbered CSV files that exist for a table."""
    amount = 0
    while db.csv_path(table_name, amount + 1).is_file():
        amount += 1
    return amount


def copy_header(source: str | Path, target: str | Path) -> None:
    """Overwrite ``target`` with the first line (first word) of ``source``."""
    header = _first_token(source)
    Path(target).write_text(header + "\n", encoding="utf-8")


def extract_quoted(text: str) -> list[str]:
    """Collect the non-empty values enclosed in single quotes."""
    values: list[str] = []
    inside = False
    current: list[str] = []
    for char in text:
        if char == "'":
            inside = not inside
            if not inside and current:
                values.append("".join(current))
                current.clear()
        elif inside:
            current.append(char)
    return values


def column_value(
    db: Database,
    tables: Sequence[str],
    column_ref: str,
    row1: int,
    row2: int,
) -> str:
    """Value of ``table.column`` at ``row1`` or ``row2``.

    ``tables`` holds the first and second table of the query; a reference to
    the first table reads ``row1``, to the second ``row2``. Only the first
    CSV file of the table is read. Unknown tables or columns give "".
    """
    table_name, dot, column = column_ref.partition(".")
    if not dot:
        column = column_ref
    if count_csv_files(db, table_name) == 0:
        return ""
    header, rows = _read_csv(db.csv_path(table_name, 1))
    if column not in header:
        return ""
    index = header.index(column)
    first, second = tables
    if table_name == first:
        row = row1
    elif table_name == second:
        row = row2
    else:
        return ""
    return rows[row][index]


def _operand(
    db: Database, text: str, tables: Sequence[str], row1: int, row2: int
) -> str:
    text = clean_string(text)
    if has_dot(text):
        value = column_value(db, tables, text, row1, row2)
    else:
        value = clean_string(text)
    return clean_string(value)


def evaluate(
    db: Database,
    query: str,
    tables: Sequence[str],
    row1: int,
    row2: int,
) -> bool:
    """Evaluate a condition with OR, AND and ``=`` for a pair of rows.

    OR binds loosest, then AND; each splits at its first occurrence.
    A condition without ``=`` is false.
    """
    cleaned = clean_string(query)
    for keyword, combine in (("OR", any), ("AND", all)):
        position = cleaned.find(keyword)
        if position != -1:
            left = evaluate(db, cleaned[:position], tables, row1, row2)
            right = evaluate(db, cleaned[position + len(keyword):], tables, row1, row2)
            return combine((left, right))
    left, equals, right = cleaned.partition("=")
    if not equals:
        return False
    return _operand(db, left, tables, row1, row2) == _operand(
        db, right, tables, row1, row2
    )