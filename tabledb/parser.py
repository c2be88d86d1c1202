"""Command interpreter for SELECT, INSERT and DELETE queries."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Optional, Sequence, TextIO

from .conditions import clean_string, split_point
from .locking import TableLockedError, is_locked, table_lock
from .operations import OperationError, delete_rows, insert_row
from .schema import Database, create_directories_and_files, load_schema
from .select import cross_join, select_where

_WORD = re.compile(r"\S+")


class QueryError(Exception):
    """Raised when a query is malformed or cannot be carried out."""


class _Words:
    """Reads whitespace-separated words from a command, then its remainder."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def next(self) -> str:
        match = _WORD.search(self._text, self._pos)
        if match is None:
            self._pos = len(self._text)
            return ""
        self._pos = match.end()
        return match.group()

    def rest(self) -> str:
        remainder = self._text[self._pos:]
        self._pos = len(self._text)
        return remainder


def _expect(word: str, keyword: str) -> None:
    if word != keyword:
        raise QueryError("Incorrect command")


def _split(word: str) -> tuple[str, str]:
    try:
        return split_point(word)
    except ValueError as error:
        raise QueryError(str(error)) from error


def _select(db: Database, words: _Words, out: TextIO) -> None:
    table1, column1 = _split(words.next())
    table2, column2 = _split(words.next())
    _expect(words.next(), "FROM")
    for _ in range(2):
        if clean_string(words.next()) not in (table1, table2):
            raise QueryError("Incorrect table in query")
    if words.next() == "WHERE":
        lines = select_where(db, words.rest(), (table1, table2))
    else:
        lines = cross_join(db, (column1, column2))
    for line in lines:
        out.write(line + "\n")


def _check_table(db: Database, table_name: str) -> None:
    if not db.has_table(table_name):
        raise QueryError("Table does not exist")


def _delete(db: Database, words: _Words) -> None:
    _expect(words.next(), "FROM")
    table_name = words.next()
    _check_table(db, table_name)
    if is_locked(db, table_name):
        raise QueryError("Table is locked")
    _expect(words.next(), "WHERE")
    query_table, column = _split(words.next())
    if query_table != table_name:
        raise QueryError("Incorrect table in query")
    _expect(words.next(), "=")
    with table_lock(db, table_name):
        delete_rows(db, table_name, words.rest(), column)


def _read_key(db: Database, table_name: str) -> int:
    key_path = db.table_dir(table_name) / f"{table_name}_pk_sequence.txt"
    try:
        return int(key_path.read_text(encoding="utf-8").split()[0])
    except (OSError, ValueError, IndexError) as error:
        raise QueryError("Error while reading key file") from error


def _insert(db: Database, words: _Words) -> None:
    _expect(words.next(), "INTO")
    table_name = words.next()
    _check_table(db, table_name)
    _expect(words.next(), "VALUES")
    if is_locked(db, table_name):
        raise QueryError("Table is locked")
    with table_lock(db, table_name):
        current_key = _read_key(db, table_name)
        insert_row(db, table_name, words.rest(), current_key)


def execute(db: Database, command: str, out: TextIO) -> bool:
    """Run one command, writing any result rows to ``out``.

    Returns False for ``exit`` and True otherwise; raises QueryError when
    the command fails.
    """
    words = _Words(command)
    keyword = words.next()
    if keyword == "exit":
        return False
    handlers = {
        "SELECT": lambda: _select(db, words, out),
        "DELETE": lambda: _delete(db, words),
        "INSERT": lambda: _insert(db, words),
    }
    handler = handlers.get(keyword)
    if handler is None:
        raise QueryError("Incorrect SQL query")
    try:
        handler()
    except (ValueError, IndexError, OSError, OperationError, TableLockedError) as error:
        raise QueryError(str(error)) from error
    return True


def query_loop(db: Database, stdin: TextIO, stdout: TextIO, stderr: TextIO) -> None:
    """Prompt for commands until ``exit`` or end of input."""
    while True:
        stdout.write("< ")
        stdout.flush()
        line = stdin.readline()
        if not line:
            return
        try:
            if not execute(db, line.rstrip("\r\n"), stdout):
                return
        except QueryError as error:
            stderr.write(f"{error}\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Load the schema, create the table files and start the query loop."""
    parser = argparse.ArgumentParser(description="Run queries against CSV tables.")
    parser.add_argument("schema", nargs="?", default="schema.json")
    args = parser.parse_args(argv)
    db = load_schema(args.schema)
    create_directories_and_files(db)
    print("Files were successfully created")
    query_loop(db, sys.stdin, sys.stdout, sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())