"""
SQLite database integration.

The ``Database`` class owns the single connection shared by all
requests.  It is constructed explicitly at application start, opened
(which also creates the schema), handed to the services, and closed
when the application shuts down::

    with Database(get_database_path(settings.database_url)) as db:
        ...

``Database.cursor`` scopes one unit of work: it yields a cursor,
commits when the block completes and rolls back otherwise.  sqlite
failures never leave this module as ``sqlite3`` exceptions; they are
re‑raised as ``ConstraintViolation`` (a uniqueness or NOT NULL
constraint rejected the statement) or ``DatabaseError`` (anything
else), so callers can tell the two apart without looking at vendor
error codes.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS students (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    age INTEGER NOT NULL,
    email TEXT UNIQUE NOT NULL,
    course TEXT NOT NULL,
    DateAdded TEXT NOT NULL
)
"""

# Range of an SQLite INTEGER; Python ints outside it cannot be bound.
MIN_INTEGER = -(2**63)
MAX_INTEGER = 2**63 - 1


def fits_integer(value: int) -> bool:
    return MIN_INTEGER <= value <= MAX_INTEGER


class DatabaseError(Exception):
    """A storage operation failed."""


class ConstraintViolation(DatabaseError):
    """A statement was rejected by a table constraint."""


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths and ``:memory:`` are returned unchanged.  Relative
    paths are resolved against the project root.
    """
    if database_url == ":memory:" or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def _translate(exc: sqlite3.Error) -> DatabaseError:
    if isinstance(exc, sqlite3.IntegrityError):
        return ConstraintViolation(str(exc))
    return DatabaseError(str(exc))


class Database:
    """Storage‑access object wrapping one SQLite connection."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._conn: Optional[sqlite3.Connection] = None
        # sqlite3 connections must not run two statements at once; handlers
        # execute on FastAPI's threadpool so access is serialised here.
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> None:
        """Connect and ensure the schema exists.

        Raises ``DatabaseError`` if the file cannot be opened or the
        schema cannot be created.
        """
        try:
            conn = sqlite3.connect(self.path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise _translate(exc) from exc
        # Return rows as dict‑like objects keyed by column name
        conn.row_factory = sqlite3.Row
        self._conn = conn
        try:
            self.init_schema()
        except DatabaseError:
            self.close()
            raise
        logger.info("Opened database %s", self.path)

    def init_schema(self) -> None:
        """Create the ``students`` table if it does not exist."""
        with self.cursor() as cursor:
            cursor.execute(SCHEMA)

    def close(self) -> None:
        if self._conn is None:
            return
        with self._lock:
            self._conn.close()
            self._conn = None
        logger.info("Closed database %s", self.path)

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor for one unit of work.

        Commits on success.  On failure the transaction is rolled back
        and sqlite errors are translated to ``DatabaseError`` /
        ``ConstraintViolation``.
        """
        if self._conn is None:
            raise DatabaseError("Database is not open")
        with self._lock:
            cursor = self._conn.cursor()
            try:
                yield cursor
                self._conn.commit()
            except sqlite3.Error as exc:
                self._conn.rollback()
                raise _translate(exc) from exc
            except OverflowError as exc:
                # Raised while binding an int that does not fit in 64 bits.
                self._conn.rollback()
                raise DatabaseError(str(exc)) from exc
            except Exception:
                self._conn.rollback()
                raise
            finally:
                cursor.close()

    def __enter__(self) -> "Database":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
