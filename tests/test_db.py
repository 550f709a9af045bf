"""
Tests for the Database storage‑access object and application startup.
"""

import os

import pytest
from fastapi.testclient import TestClient

from student_records_api.app.core.config import Settings
from student_records_api.app.core.db import (
    ConstraintViolation,
    Database,
    DatabaseError,
    fits_integer,
    get_database_path,
)
from student_records_api.app.main import create_app

INSERT = "INSERT INTO students (name, age, email, course, DateAdded) VALUES (?, ?, ?, ?, ?)"
ROW = ("Ana", 21, "ana@x.com", "CS", "2024-01-01T00:00:00.000Z")


def test_schema_creation_is_idempotent(db_path):
    with Database(db_path) as db:
        with db.cursor() as cursor:
            cursor.execute(INSERT, ROW)

    with Database(db_path) as db:
        with db.cursor() as cursor:
            rows = cursor.execute("SELECT * FROM students").fetchall()

    assert len(rows) == 1
    assert rows[0]["email"] == "ana@x.com"


def test_unique_email_raises_constraint_violation(db):
    with db.cursor() as cursor:
        cursor.execute(INSERT, ROW)

    with pytest.raises(ConstraintViolation):
        with db.cursor() as cursor:
            cursor.execute(INSERT, ROW)


def test_other_failures_raise_database_error(db):
    with pytest.raises(DatabaseError) as excinfo:
        with db.cursor() as cursor:
            cursor.execute("SELECT * FROM missing_table")

    assert not isinstance(excinfo.value, ConstraintViolation)


def test_failed_unit_of_work_is_rolled_back(db):
    with pytest.raises(ConstraintViolation):
        with db.cursor() as cursor:
            cursor.execute(INSERT, ROW)
            cursor.execute(INSERT, ROW)

    with db.cursor() as cursor:
        count = cursor.execute("SELECT COUNT(*) AS n FROM students").fetchone()["n"]
    assert count == 0


def test_cursor_requires_open_database(db_path):
    db = Database(db_path)

    with pytest.raises(DatabaseError):
        with db.cursor():
            pass


def test_close_is_idempotent(db):
    db.close()
    db.close()

    assert not db.is_open


def test_open_fails_for_unusable_path(tmp_path):
    db = Database(str(tmp_path))

    with pytest.raises(DatabaseError):
        db.open()
    assert not db.is_open


def test_get_database_path():
    assert get_database_path(":memory:") == ":memory:"
    absolute = os.path.abspath("some.db")
    assert get_database_path(absolute) == absolute
    resolved = get_database_path("students.db")
    assert os.path.isabs(resolved)
    assert resolved.endswith("students.db")


def test_startup_fails_without_database(tmp_path, caplog):
    app = create_app(Settings(database_url=str(tmp_path)))

    with caplog.at_level("ERROR"):
        with pytest.raises(DatabaseError):
            with TestClient(app):
                pass

    assert "Database error" in caplog.text


def test_database_closed_on_shutdown(app):
    with TestClient(app):
        db = app.state.db
        assert db.is_open

    assert not db.is_open


def test_cors_origin_list():
    settings = Settings(cors_origins="http://a.example, http://b.example,")

    assert settings.cors_origin_list == ["http://a.example", "http://b.example"]


def test_unbindable_integer_raises_database_error(db):
    with pytest.raises(DatabaseError):
        with db.cursor() as cursor:
            cursor.execute("SELECT * FROM students WHERE id = ?", (2**64,))


def test_fits_integer_bounds():
    assert fits_integer(2**63 - 1)
    assert fits_integer(-(2**63))
    assert not fits_integer(2**63)
    assert not fits_integer(-(2**63) - 1)
