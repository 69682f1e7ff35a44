from __future__ import annotations

from pathlib import Path

from workzen.database.bootstrap import _iter_sql_statements, _strip_comments, _strip_create_db_and_use
from workzen.database.mysql_base import dump_json, load_json

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _statements(path: Path) -> list[str]:
    sql = _strip_create_db_and_use(path.read_text(encoding="utf-8"))
    return list(_iter_sql_statements(_strip_comments(sql)))


def test_schema_creates_every_table():
    statements = _statements(DATABASE_DIR / "schema.sql")

    assert all(s.upper().startswith("CREATE TABLE") for s in statements)
    tables = {s.split()[5] for s in statements}
    assert tables == {
        "users",
        "employees",
        "user_profiles",
        "attendance_records",
        "leave_requests",
        "payruns",
        "payrolls",
    }


def test_seed_has_no_database_switch():
    statements = _statements(DATABASE_DIR / "seed.sql")
    assert statements
    assert not any(s.upper().startswith(("USE ", "CREATE DATABASE")) for s in statements)


def test_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); INSERT INTO t VALUES (\"c;d\");"
    assert list(_iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
    ]


def test_json_columns_decode_from_any_connector_type():
    payload = {"days": 4, "note": "4 paid leave days"}
    encoded = dump_json(payload)

    assert load_json(encoded) == payload
    assert load_json(encoded.encode("utf-8")) == payload
    assert load_json(bytearray(encoded, "utf-8")) == payload
    assert load_json(None, []) == []
    assert load_json("  ", {}) == {}
