"""
Student endpoints.

These routes expose CRUD operations on student records.  The handlers
are plain functions: FastAPI runs them on its threadpool, so a request
waiting on the database does not hold up unrelated requests.  Errors
raised by ``StudentService`` are converted to JSON responses by the
handlers in ``api.errors``.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from student_records_api.app.schemas.student import (
    ErrorResponse,
    MessageResponse,
    StudentCreate,
    StudentRead,
    StudentUpdate,
)
from student_records_api.app.services.student_service import StudentService

router = APIRouter()

_not_found = {404: {"model": ErrorResponse, "description": "Student not found"}}
_bad_request = {400: {"model": ErrorResponse, "description": "Missing field or duplicate email"}}


def get_student_service(request: Request) -> StudentService:
    """Return the service instance created during application startup."""
    return request.app.state.student_service


@router.post("", response_model=StudentRead, responses=_bad_request)
def create_student(
    student_in: Optional[StudentCreate] = None,
    service: StudentService = Depends(get_student_service),
) -> StudentRead:
    """Create a new student and return it with its ``id`` and ``DateAdded``.

    A missing body is treated like an empty one: HTTP 400 with
    ``All fields are required``.
    """
    return service.create_student(student_in)


@router.get("", response_model=List[StudentRead])
def list_students(service: StudentService = Depends(get_student_service)) -> List[StudentRead]:
    """Return all students."""
    return service.list_students()


@router.get("/{student_id}", response_model=StudentRead, responses=_not_found)
def get_student(
    student_id: int,
    service: StudentService = Depends(get_student_service),
) -> StudentRead:
    """Return one student.  HTTP 404 if the id does not exist."""
    return service.get_student(student_id)


@router.put("/{student_id}", response_model=MessageResponse, responses={**_bad_request, **_not_found})
def update_student(
    student_id: int,
    student_in: Optional[StudentUpdate] = None,
    service: StudentService = Depends(get_student_service),
) -> MessageResponse:
    """Replace name, age, email and course of a student."""
    service.update_student(student_id, student_in)
    return MessageResponse(message="Student updated successfully")


@router.delete("/{student_id}", response_model=MessageResponse, responses=_not_found)
def delete_student(
    student_id: int,
    service: StudentService = Depends(get_student_service),
) -> MessageResponse:
    """Permanently delete a student.  HTTP 404 if the id does not exist."""
    service.delete_student(student_id)
    return MessageResponse(message="Student deleted successfully")
