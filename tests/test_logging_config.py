"""
Tests for logging setup driven by Settings.
"""

import logging

from student_records_api.app.core.config import Settings
from student_records_api.app.core.logging_config import HANDLER_NAME, setup_logging


def _own_handlers():
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


def test_writes_to_log_file_with_format(tmp_path):
    log_file = tmp_path / "logs" / "api.log"

    setup_logging(Settings(log_file=str(log_file), log_format="%(levelname)s|%(message)s"))
    logging.getLogger("student_records_api.test").warning("disk nearly full")
    for handler in _own_handlers():
        handler.flush()

    assert "WARNING|disk nearly full" in log_file.read_text(encoding="utf-8")


def test_reconfiguring_replaces_own_handlers(tmp_path):
    foreign = logging.NullHandler()
    logging.getLogger().addHandler(foreign)
    try:
        setup_logging(Settings(log_file=str(tmp_path / "a.log")))
        setup_logging(Settings(log_file=""))

        assert len(_own_handlers()) == 1
        assert not isinstance(_own_handlers()[0], logging.FileHandler)
        assert foreign in logging.getLogger().handlers
    finally:
        logging.getLogger().removeHandler(foreign)


def test_level_from_settings():
    setup_logging(Settings(log_level="warning"))

    assert logging.getLogger().level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    setup_logging(Settings(log_level="chatty"))

    assert logging.getLogger().level == logging.INFO
