import io
import json

import pytest

from tabledb.locking import is_locked, lock
from tabledb.parser import QueryError, execute, main, query_loop
from tabledb.schema import Database, Table, create_directories_and_files


@pytest.fixture
def db(tmp_path):
    database = Database(name="shop", tuples_limit=5, base_dir=tmp_path)
    database.tables.append(Table("people", ["name", "age"]))
    database.tables.append(Table("towns", ["city"]))
    create_directories_and_files(database)
    return database


def _lines(db, table):
    return db.csv_path(table, 1).read_text(encoding="utf-8").splitlines()


def _key(db, table):
    path = db.table_dir(table) / f"{table}_pk_sequence.txt"
    return path.read_text(encoding="utf-8")


def test_exit_stops(db):
    assert execute(db, "exit", io.StringIO()) is False


def test_insert_appends_row(db):
    assert execute(db, "INSERT INTO people VALUES ('alice', '30')", io.StringIO())
    assert _lines(db, "people")[1:] == ["1,alice,30"]
    assert _key(db, "people") == "2"
    assert not is_locked(db, "people")


def test_insert_pads_missing_values(db):
    execute(db, "INSERT INTO people VALUES ('alice')", io.StringIO())
    assert _lines(db, "people")[1] == "1,alice,NULL"


def test_insert_too_many_values(db):
    with pytest.raises(QueryError, match="more values than columns"):
        execute(db, "INSERT INTO towns VALUES ('a', 'b')", io.StringIO())
    assert not is_locked(db, "towns")


def test_insert_unknown_table(db):
    with pytest.raises(QueryError, match="Table does not exist"):
        execute(db, "INSERT INTO nowhere VALUES ('a')", io.StringIO())


def test_insert_requires_values_keyword(db):
    with pytest.raises(QueryError, match="Incorrect command"):
        execute(db, "INSERT INTO people ('a')", io.StringIO())


def test_insert_into_locked_table(db):
    lock(db, "people")
    with pytest.raises(QueryError, match="Table is locked"):
        execute(db, "INSERT INTO people VALUES ('a', '1')", io.StringIO())


def test_delete_removes_matching_rows(db):
    out = io.StringIO()
    execute(db, "INSERT INTO people VALUES ('alice', '30')", out)
    execute(db, "INSERT INTO people VALUES ('bob', '40')", out)
    execute(db, "DELETE FROM people WHERE people.name = 'alice'", out)
    assert _lines(db, "people")[1:] == ["2,bob,40"]
    assert not is_locked(db, "people")


def test_delete_missing_value(db):
    execute(db, "INSERT INTO people VALUES ('alice', '30')", io.StringIO())
    with pytest.raises(QueryError, match="Value does not exist"):
        execute(db, "DELETE FROM people WHERE people.name = 'zed'", io.StringIO())
    assert not is_locked(db, "people")


def test_delete_wrong_table_in_condition(db):
    with pytest.raises(QueryError, match="Incorrect table in query"):
        execute(db, "DELETE FROM people WHERE towns.city = 'x'", io.StringIO())


def test_delete_requires_equals(db):
    with pytest.raises(QueryError, match="Incorrect command"):
        execute(db, "DELETE FROM people WHERE people.name 'x'", io.StringIO())


def test_select_cross_join_writes_lines(db):
    out = io.StringIO()
    execute(db, "INSERT INTO people VALUES ('alice', '30')", out)
    execute(db, "INSERT INTO towns VALUES ('paris')", out)
    execute(db, "INSERT INTO towns VALUES ('rome')", out)
    out = io.StringIO()
    execute(db, "SELECT people.name, towns.city FROM people, towns", out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 2
    assert all(line.startswith("1: alice  |   ") for line in lines)


def test_select_where_writes_matching_lines(db):
    execute(db, "INSERT INTO people VALUES ('alice', '30')", io.StringIO())
    execute(db, "INSERT INTO towns VALUES ('paris')", io.StringIO())
    execute(db, "INSERT INTO towns VALUES ('rome')", io.StringIO())
    out = io.StringIO()
    execute(
        db,
        "SELECT people.name, towns.city FROM people, towns WHERE towns.city = 'rome'",
        out,
    )
    lines = out.getvalue().splitlines()
    assert len(lines) == 1
    assert "rome" in lines[0]


def test_select_wrong_from_table(db):
    with pytest.raises(QueryError, match="Incorrect table in query"):
        execute(db, "SELECT people.name, towns.city FROM other, towns", io.StringIO())


def test_select_bad_column_reference(db):
    with pytest.raises(QueryError, match="Incorrect format"):
        execute(db, "SELECT name towns.city FROM people, towns", io.StringIO())


def test_unknown_command(db):
    with pytest.raises(QueryError, match="Incorrect SQL query"):
        execute(db, "UPDATE people", io.StringIO())


def test_query_loop_reports_errors_and_stops(db):
    stdin = io.StringIO("BOGUS\nINSERT INTO towns VALUES ('oslo')\nexit\nBOGUS\n")
    stdout, stderr = io.StringIO(), io.StringIO()
    query_loop(db, stdin, stdout, stderr)
    assert stderr.getvalue().splitlines() == ["Incorrect SQL query"]
    assert stdout.getvalue().count("< ") == 3
    assert _lines(db, "towns")[1:] == ["1,oslo"]


def test_query_loop_ends_at_eof(db):
    stdout = io.StringIO()
    query_loop(db, io.StringIO(""), stdout, io.StringIO())
    assert stdout.getvalue() == "< "


def test_main_creates_layout(tmp_path, monkeypatch, capsys):
    schema = {
        "name": "store",
        "tuples_limit": 3,
        "structure": {"items": ["title"], "shelves": ["label"]},
    }
    (tmp_path / "schema.json").write_text(json.dumps(schema), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("exit\n"))
    assert main([]) == 0
    header = (tmp_path / "store" / "items" / "items_1.csv").read_text(encoding="utf-8")
    assert header == "items_pk,title\n"
    assert "Files were successfully created" in capsys.readouterr().out