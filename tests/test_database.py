import sqlite3

import pytest

from nestedcsv import database
from nestedcsv.transformer import TransformedRecord


def test_init_db_applies_migrations(sqlite_connection):
    names = [
        row["name"]
        for row in sqlite_connection.execute("SELECT name FROM schema_migrations").fetchall()
    ]
    assert names == ["001_create_users_age_index"]

    database.run_migrations(sqlite_connection)
    count = sqlite_connection.execute("SELECT COUNT(*) FROM schema_migrations").fetchone()[0]
    assert count == 1


def test_sink_inserts_and_decodes_json(sqlite_connection):
    sink = database.SQLiteSink(sqlite_connection)
    rows = [
        TransformedRecord(
            name="Aarav Sharma",
            age=30,
            address={"city": "Mumbai"},
            additional_info={"gender": "male"},
        ).to_row(),
        TransformedRecord(name="Priya Patel", age=17).to_row(),
    ]

    assert sink.insert(rows) == 2

    users = database.fetch_users(sqlite_connection)
    assert [(user["name"], user["age"]) for user in users] == [
        ("Aarav Sharma", 30),
        ("Priya Patel", 17),
    ]
    assert users[0]["address"] == {"city": "Mumbai"}
    assert users[0]["additional_info"] == {"gender": "male"}
    assert users[1]["address"] is None
    assert database.fetch_ages(sqlite_connection) == [17, 30]


def test_sink_failure_commits_nothing_from_the_batch(sqlite_connection):
    sink = database.SQLiteSink(sqlite_connection)
    rows = [
        {"name": "Ok", "age": 1, "address": None, "additional_info": None},
        {"name": None, "age": 2, "address": None, "additional_info": None},
    ]

    with pytest.raises(sqlite3.IntegrityError):
        sink.insert(rows)

    assert database.count_users(sqlite_connection) == 0


def test_delete_users(sqlite_connection):
    sink = database.SQLiteSink(sqlite_connection)
    sink.insert([TransformedRecord(name="A B", age=1).to_row()])

    assert database.delete_users(sqlite_connection) == 1
    assert database.count_users(sqlite_connection) == 0


def test_sink_rolls_back_batch_when_binding_fails(sqlite_connection):
    sink = database.SQLiteSink(sqlite_connection)
    rows = [
        TransformedRecord(name="A B", age=30).to_row(),
        TransformedRecord(name="C D", age=99999999999999999999).to_row(),
    ]

    with pytest.raises(OverflowError):
        sink.insert(rows)
    sqlite_connection.commit()

    assert database.count_users(sqlite_connection) == 0
