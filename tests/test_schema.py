import json
from pathlib import Path

import pytest

from tabledb.schema import (
    Database,
    Table,
    create_csv_file,
    create_directories_and_files,
    create_lock_file,
    create_primary_key_file,
    load_schema,
)


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({
        "name": "shop",
        "tuples_limit": 3,
        "structure": {
            "users": ["name", "age"],
            "orders": ["item"],
        },
    }), encoding="utf-8")
    return path


def test_load_schema_reads_structure(schema_file):
    db = load_schema(schema_file)
    assert db.name == "shop"
    assert db.tuples_limit == 3
    assert [t.name for t in db.tables] == ["users", "orders"]
    assert db.tables.find("users").columns == ["name", "age"]
    assert db.has_table("orders")
    assert not db.has_table("missing")


def test_load_schema_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_schema(tmp_path / "absent.json")


def test_paths(tmp_path):
    db = Database("shop", 5, base_dir=tmp_path)
    assert db.table_dir("users") == tmp_path / "shop" / "users"
    assert db.csv_path("users", 2) == tmp_path / "shop" / "users" / "users_2.csv"


def test_create_csv_file_writes_header(tmp_path):
    path = create_csv_file(tmp_path, Table("users", ["name", "age"]))
    assert path.name == "users_1.csv"
    assert path.read_text(encoding="utf-8") == "users_pk,name,age\n"


def test_create_pk_and_lock_files(tmp_path):
    pk = create_primary_key_file(tmp_path, "users")
    lock = create_lock_file(tmp_path, "users")
    assert pk.name == "users_pk_sequence.txt"
    assert pk.read_text(encoding="utf-8") == "1"
    assert lock.name == "users_lock.txt"
    assert lock.read_text(encoding="utf-8") == "unlocked"


def test_create_directories_and_files(schema_file, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    db = load_schema(schema_file)
    create_directories_and_files(db)
    for table in db.tables:
        table_dir = Path("shop") / table.name
        assert table_dir.is_dir()
        header = (table_dir / f"{table.name}_1.csv").read_text(encoding="utf-8")
        assert header.rstrip("\n").split(",") == [f"{table.name}_pk", *table.columns]
        assert (table_dir / f"{table.name}_lock.txt").read_text(encoding="utf-8") == "unlocked"


def test_create_resets_existing_files(tmp_path):
    db = Database("shop", 2, base_dir=tmp_path)
    db.tables.append(Table("users", ["name"]))
    create_directories_and_files(db)
    csv = db.csv_path("users", 1)
    csv.write_text("users_pk,name\n1,bob\n", encoding="utf-8")
    create_directories_and_files(db)
    assert csv.read_text(encoding="utf-8") == "users_pk,name\n"