"""
Service layer for student records.

``StudentService`` validates input, enforces email uniqueness and
translates between the API schemas and rows of the ``students``
table.  Failures are reported with the exceptions defined in
``core.exceptions``; the API layer maps them to HTTP responses.

Email uniqueness is checked twice.  A lookup before each write
rejects the obvious duplicates, and the ``UNIQUE`` constraint on the
column rejects whatever slips between that lookup and the write (two
requests racing with the same address).  Both paths raise
``ConflictError``.

All queries use parameterized statements.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from typing import List, Optional

from student_records_api.app.core.db import ConstraintViolation, Database, DatabaseError, fits_integer
from student_records_api.app.core.exceptions import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from student_records_api.app.schemas.student import StudentBase, StudentCreate, StudentRead, StudentUpdate

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class StudentService:
    """Service class for managing students."""

    def __init__(self, db: Database) -> None:
        self.db = db

    def create_student(self, data: Optional[StudentCreate]) -> StudentRead:
        """Insert a new student and return it with its generated fields."""
        self._validate(data)
        try:
            if self._email_taken(data.email):
                logger.info("Rejected student with duplicate email %s", data.email)
                raise ConflictError()
            date_added = _now_iso()
            with self.db.cursor() as cursor:
                cursor.execute(
                    """
                    INSERT INTO students (name, age, email, course, DateAdded)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (data.name, data.age, data.email, data.course, date_added),
                )
                student_id = cursor.lastrowid
        except ConstraintViolation:
            logger.info("Insert rejected by email constraint for %s", data.email)
            raise ConflictError()
        except DatabaseError as exc:
            logger.error("Error adding student: %s", exc)
            raise StorageError() from exc
        logger.info("Created student %s", student_id)
        return StudentRead(
            id=student_id,
            name=data.name,
            age=data.age,
            email=data.email,
            course=data.course,
            date_added=date_added,
        )

    def list_students(self) -> List[StudentRead]:
        """Return every student, in whatever order the table yields them."""
        try:
            with self.db.cursor() as cursor:
                rows = cursor.execute("SELECT * FROM students").fetchall()
        except DatabaseError as exc:
            logger.error("Error retrieving students: %s", exc)
            raise StorageError() from exc
        return [self._row_to_student_read(row) for row in rows]

    def get_student(self, student_id: int) -> StudentRead:
        """Retrieve a single student by its ID."""
        # No row can have an id outside the INTEGER range.
        if not fits_integer(student_id):
            raise NotFoundError()
        try:
            with self.db.cursor() as cursor:
                row = cursor.execute(
                    "SELECT * FROM students WHERE id = ?",
                    (student_id,),
                ).fetchone()
        except DatabaseError as exc:
            logger.error("Error retrieving student: %s", exc)
            raise StorageError() from exc
        if not row:
            raise NotFoundError()
        return self._row_to_student_read(row)

    def update_student(self, student_id: int, data: Optional[StudentUpdate]) -> None:
        """Overwrite name, age, email and course of an existing student.

        ``DateAdded`` is left untouched.  Keeping the student's own
        current email is not a conflict.
        """
        self._validate(data)
        storable_id = fits_integer(student_id)
        try:
            # An id no row can have excludes nothing from the lookup.
            exclude_id = student_id if storable_id else None
            if self._email_taken(data.email, exclude_id=exclude_id):
                logger.info("Rejected update of student %s to duplicate email %s", student_id, data.email)
                raise ConflictError()
            if not storable_id:
                raise NotFoundError()
            with self.db.cursor() as cursor:
                cursor.execute(
                    """
                    UPDATE students
                    SET name = ?, age = ?, email = ?, course = ?
                    WHERE id = ?
                    """,
                    (data.name, data.age, data.email, data.course, student_id),
                )
                affected = cursor.rowcount
        except ConstraintViolation:
            logger.info("Update of student %s rejected by email constraint", student_id)
            raise ConflictError()
        except DatabaseError as exc:
            logger.error("Error updating student: %s", exc)
            raise StorageError() from exc
        if affected == 0:
            raise NotFoundError()
        logger.info("Updated student %s", student_id)

    def delete_student(self, student_id: int) -> None:
        """Permanently delete a student by ID."""
        if not fits_integer(student_id):
            raise NotFoundError()
        try:
            with self.db.cursor() as cursor:
                cursor.execute("DELETE FROM students WHERE id = ?", (student_id,))
                affected = cursor.rowcount
        except DatabaseError as exc:
            logger.error("Error deleting student: %s", exc)
            raise StorageError() from exc
        if affected == 0:
            raise NotFoundError()
        logger.info("Deleted student %s", student_id)

    def _email_taken(self, email: str, exclude_id: int | None = None) -> bool:
        with self.db.cursor() as cursor:
            if exclude_id is None:
                row = cursor.execute(
                    "SELECT id FROM students WHERE email = ?",
                    (email,),
                ).fetchone()
            else:
                row = cursor.execute(
                    "SELECT id FROM students WHERE email = ? AND id != ?",
                    (email, exclude_id),
                ).fetchone()
        return row is not None

    @staticmethod
    def _validate(data: Optional[StudentBase]) -> None:
        if data is None:
            logger.debug("Rejected request without a student payload")
            raise ValidationError()
        missing = data.missing_fields()
        if missing:
            logger.debug("Rejected student payload missing %s", ", ".join(missing))
            raise ValidationError()
        # Any age is accepted as long as the column can store it.
        if not fits_integer(data.age):
            raise ValidationError("Age is out of range")

    @staticmethod
    def _row_to_student_read(row: sqlite3.Row) -> StudentRead:
        """Convert a database row to a StudentRead schema instance."""
        return StudentRead(
            id=row["id"],
            name=row["name"],
            age=row["age"],
            email=row["email"],
            course=row["course"],
            date_added=row["DateAdded"],
        )
