"""
Main entrypoint for the Student Records API.

This module assembles the FastAPI application: logging, CORS, error
handlers and the ``/api`` routes.  ``create_app`` builds and
configures the app, which is then instantiated at module import time
as ``app`` so it can be served directly, e.g.::

    uvicorn student_records_api.app.main:app --port 3000

The database is opened in the application lifespan before the first
request is served and closed on shutdown.  If it cannot be opened the
error is logged and startup fails, so the server never runs without
storage.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import add_error_handlers
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database, DatabaseError, get_database_path
from .core.logging_config import setup_logging
from .services.student_service import StudentService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use.  Defaults to the settings read from the
        environment at import time.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings

    # Initialise logging before anything else so startup can log.
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db = Database(get_database_path(settings.database_url))
        try:
            db.open()
        except DatabaseError as exc:
            logger.error("Database error: %s", exc)
            raise
        app.state.db = db
        app.state.student_service = StudentService(db)
        try:
            yield
        finally:
            db.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_error_handlers(app)

    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
