"""
Logging configuration for the service.

``setup_logging`` applies the ``log_level``, ``log_format`` and
``log_file`` settings to the root logger.  The handlers it installs are
tagged with ``HANDLER_NAME``; calling it again (for instance when
``create_app`` builds a second app with other settings) replaces those
handlers and leaves any installed by someone else, such as pytest or
uvicorn, in place.
"""

import logging
from pathlib import Path
from typing import List

from .config import Settings

HANDLER_NAME = "student_records_api"


def _build_handlers(settings: Settings) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        log_path = Path(settings.log_file).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def remove_handlers() -> None:
    """Detach and close the handlers installed by ``setup_logging``."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()


def setup_logging(settings: Settings) -> None:
    """Configure the root logger from ``settings``.

    Unknown level names fall back to ``INFO``.  A ``log_file`` whose
    directory does not exist yet gets the directory created.
    """
    remove_handlers()

    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=settings.log_format, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in _build_handlers(settings):
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(formatter)
        root.addHandler(handler)
