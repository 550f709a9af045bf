"""
Top‑level API router.

Aggregates the resource routers under their prefixes; the application
mounts this router under ``/api``.
"""

from fastapi import APIRouter

from .endpoints import students

router = APIRouter()

router.include_router(students.router, prefix="/students", tags=["students"])
