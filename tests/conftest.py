"""
pytest configuration and fixtures.

Every test runs against its own SQLite file under ``tmp_path``.
"""

import logging

import pytest
from fastapi.testclient import TestClient

from student_records_api.app.core.config import Settings
from student_records_api.app.core.db import Database
from student_records_api.app.core.logging_config import remove_handlers
from student_records_api.app.main import create_app
from student_records_api.app.services.student_service import StudentService


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop the handlers each ``create_app`` call installs."""
    level = logging.getLogger().level
    yield
    remove_handlers()
    logging.getLogger().setLevel(level)


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "students.db")


@pytest.fixture
def settings(db_path):
    return Settings(database_url=db_path, cors_origins="*")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with the application lifespan (database open) running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db(db_path):
    with Database(db_path) as database:
        yield database


@pytest.fixture
def service(db):
    return StudentService(db)


@pytest.fixture
def ana():
    return {"name": "Ana", "age": 21, "email": "ana@x.com", "course": "CS"}


@pytest.fixture
def ben():
    return {"name": "Ben", "age": 23, "email": "ben@x.com", "course": "Math"}
