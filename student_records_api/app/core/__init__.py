"""
Core infrastructure shared by the rest of the application.

Configuration (``config``), logging setup (``logging_config``), the
SQLite storage object (``db``) and the error categories reported to
clients (``exceptions``).
"""
