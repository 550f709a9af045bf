"""Entry point for the Student Records API.

Serves the FastAPI application with uvicorn.  Host and port come from
the ``HOST`` and ``PORT`` environment variables (defaults ``0.0.0.0``
and ``3000``); the remaining configuration is described in
``student_records_api.app.core.config``.

If the database cannot be opened at startup the process exits with
status 1.

Usage:
    python run.py
"""
import asyncio
import logging
import sys

from uvicorn import Config, Server

from student_records_api.app.core.config import settings
from student_records_api.app.main import app


async def serve() -> bool:
    """Run the server until shutdown.  Returns ``False`` if startup failed."""
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level="info")
    server = Server(config)
    await server.serve()
    return server.started


def main() -> None:
    try:
        started = asyncio.run(serve())
    except (KeyboardInterrupt, SystemExit):
        return
    if not started:
        logging.getLogger(__name__).error("Server failed to start")
        sys.exit(1)


if __name__ == "__main__":
    main()
