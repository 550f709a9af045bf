"""
Pydantic schemas for student records.

Request bodies declare every field as optional so that a missing
field reaches the service layer, which rejects it with the
``All fields are required`` error rather than a framework‑specific
validation payload.  ``StudentRead`` exposes the creation timestamp
under its stored column name ``DateAdded``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StudentBase(BaseModel):
    """Fields supplied by clients when creating or updating a student."""

    name: Optional[str] = Field(None, description="Full name of the student")
    age: Optional[int] = Field(None, description="Age in years; no range is enforced")
    email: Optional[str] = Field(None, description="Email address, unique across all students")
    course: Optional[str] = Field(None, description="Course the student is enrolled in")

    def missing_fields(self) -> list[str]:
        """Return the names of fields that are absent, ``null`` or empty strings."""
        return [
            name
            for name in ("name", "age", "email", "course")
            if getattr(self, name) is None or getattr(self, name) == ""
        ]


class StudentCreate(StudentBase):
    """Schema for creating a new student."""


class StudentUpdate(StudentBase):
    """Schema for replacing the mutable fields of a student.

    All four fields are required, as on creation; ``DateAdded`` cannot
    be changed.
    """


class StudentRead(BaseModel):
    """Schema for reading a student record."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: int
    name: str
    age: int
    email: str
    course: str
    date_added: str = Field(..., alias="DateAdded", description="ISO‑8601 creation timestamp (UTC)")


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
