# tabledb

A tiny table store kept in plain CSV files and driven by a SQL-like shell,
together with a handful of small threading programs.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## The table store

A database is described by a JSON schema file:

```json
{
  "name": "my_schema",
  "tuples_limit": 1000,
  "structure": {
    "table1": ["column1", "column2"],
    "table2": ["column1", "column2"]
  }
}
```

Starting the shell:

```
tabledb [SCHEMA]
```

reads the schema (`schema.json` in the working directory by default), creates
one directory for the schema and one per table, and prints
`Files were successfully created`. Each table directory holds:

- `<table>_1.csv` and further numbered CSV files; the first column is
  `<table>_pk`, followed by the columns from the schema. Rows go to the first
  file holding fewer than `tuples_limit` rows; a new file is started when all
  existing ones are full.
- `<table>_pk_sequence.txt`, the next primary key (starting at 1).
- `<table>_lock.txt`, holding `locked` or `unlocked`.

Starting the shell rewrites these files, so any earlier contents are reset.

At the `< ` prompt the shell accepts:

```
INSERT INTO table1 VALUES ('a', 'b')
DELETE FROM table1 WHERE table1.column1 = 'a'
SELECT table1.column1 table2.column1 FROM table1, table2
SELECT table1.column1 table2.column1 FROM table1, table2 WHERE table1.column1 = table2.column1 AND table1.column2 = 'b'
exit
```

- `INSERT` writes a new row with the next primary key and stores the
  incremented key. Values are the single-quoted parts of the command. Missing
  trailing values are filled with `NULL`; more values than columns is an
  error.
- `DELETE` removes rows whose column equals one of the quoted values. The
  values are tried in order across the table's files, each value against the
  files reached so far, and the command fails with `Value does not exist` when
  nothing was removed.
- `SELECT` always works on the first two tables of the schema. Without
  `WHERE` it prints, for every pair of rows, the primary key and the named
  column of each. With `WHERE` it prints both whole rows for every pair for
  which the condition holds. Conditions are `=` comparisons between
  `table.column` references and literals, combined with `AND` and `OR` (`OR`
  binds loosest); a column reference reads from the table's first CSV file.

Errors are written to standard error and the shell carries on; `exit` or end
of input ends it. A table is marked locked in its lock file while an `INSERT`
or `DELETE` runs, and a command against a locked table is refused.

The same pieces are available from Python:

- `tabledb.schema`: `Table`, `Database`, `load_schema`,
  `create_directories_and_files`.
- `tabledb.locking`: `is_locked`, `lock`, `unlock`, and the `table_lock`
  context manager, which raises `TableLockedError` on a locked table.
- `tabledb.operations`: `insert_row` and `delete_rows`, raising
  `OperationError`.
- `tabledb.select`: `cross_join` and `select_where`, returning output lines.
- `tabledb.conditions`: `evaluate` and the small parsing helpers.
- `tabledb.parser`: `execute` runs one command and raises `QueryError`;
  `query_loop` runs the prompt over any streams.
- `tabledb.linkedlist.LinkedList`: the ordered collection holding a schema's
  tables.

## Client

```
tabledb-client [--host HOST] [--port PORT]
```

connects to `127.0.0.1`, port 7432 by default, sends each line typed at the
`Enter command: ` prompt and prints the reply. It prints `Connection failed`
and exits with status 1 when it cannot connect.

This package has no server: the shell above works on local files only, and
the client needs a server listening on the given port from elsewhere.

## Threading programs

```
tabledb-primitives [KIND] [--threads N] [--letters N]
```

Several threads (4 by default) each print a line of random printable ASCII
characters (10 by default), guarded by the chosen kind: `none`, `mutex` (the
default), `semaphore`, `semaphore-slim`, `monitor`, `spin-lock`, `spin-wait`
or `barrier`. The time taken is reported in microseconds. The primitives
`Monitor`, `SemaphoreSlim`, `SpinLock` and `SpinWait` in `tabledb.primitives`
can be used as context managers.

```
tabledb-philosophers [--count N] [--rounds N] [--think SECONDS] [--eat SECONDS]
```

The dining philosophers: by default five philosophers think for a second,
pick up both neighbouring forks (lower-numbered fork first, so they never
deadlock), eat for two seconds and release them. Without `--rounds` they dine
forever.

```
tabledb-students [--students N] [--threads N] [--course N] [--debts N] [--seed N]
```

Generates random students (course 1–5, debts 0–10) and lists those above
both the course and the debt count, timing the search with the given number
of threads and then with one. Any value not given as an option is asked for
at the prompt.