"""Row insertion and deletion on the CSV files of a table."""

from __future__ import annotations

from .conditions import (
    _first_token,
    _read_csv,
    _write_csv,
    copy_header,
    count_csv_files,
    extract_quoted,
)
from .schema import Database


class OperationError(RuntimeError):
    """Raised when an insert or delete cannot be carried out."""


def insert_row(db: Database, table_name: str, query: str, current_key: int) -> int:
    """Append the quoted values of ``query`` as a new row keyed ``current_key``.

    Rows go to the first CSV file holding fewer than the schema's row limit;
    missing trailing values are written as NULL. The incremented key is
    stored in the sequence file and returned.
    """
    if db.tuples_limit < 1:
        raise OperationError("tuples limit must be positive")

    number = 1
    while True:
        path = db.csv_path(table_name, number)
        try:
            with open(path, "a", encoding="utf-8"):
                pass
        except OSError as error:
            raise OperationError(f"Error while reading file at {path}") from error
        _, rows = _read_csv(path)
        if len(rows) < db.tuples_limit:
            break
        number += 1

    if not rows:
        copy_header(db.csv_path(table_name, 1), path)

    values = extract_quoted(query)
    expected = len(values) + 1
    columns = _first_token(path).count(",") + 1
    if columns < expected:
        raise OperationError("Error while inserting data: more values than columns")

    if columns == expected:
        line = f"{current_key}," + ",".join(values) + ("\n" if values else "")
    else:
        padding = ["NULL"] * (columns - expected)
        line = f"{current_key}," + "".join(f"{value}," for value in values)
        line += ",".join(padding) + "\n"

    with open(path, "a", encoding="utf-8") as handle:
        handle.write(line)

    new_key = current_key + 1
    key_path = db.table_dir(table_name) / f"{table_name}_pk_sequence.txt"
    key_path.write_text(str(new_key), encoding="utf-8")
    return new_key


def delete_rows(db: Database, table_name: str, query: str, column: str) -> int:
    """Delete rows whose ``column`` equals one of the quoted values in ``query``.

    The list of values is walked once across all files in order, so values
    already tried against one file are not tried against later files.
    Returns the number of rows removed.
    """
    pending = iter(extract_quoted(query))
    removed = 0
    for number in range(1, count_csv_files(db, table_name) + 1):
        path = db.csv_path(table_name, number)
        header, rows = _read_csv(path)
        for value in pending:
            if not rows:
                continue
            if column not in header:
                raise OperationError(f"column not found: {column}")
            index = header.index(column)
            kept = [row for row in rows if row[index] != value]
            if len(kept) != len(rows):
                removed += len(rows) - len(kept)
                rows = kept
                _write_csv(path, header, rows)
    if not removed:
        raise OperationError("Value does not exist")
    return removed