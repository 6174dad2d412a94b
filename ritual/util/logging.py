"""Stdlib logging bridge.

SQLAlchemy and asyncpg log through the standard library. Their records are
forwarded to Logfire so driver warnings land next to engine spans.
"""

import logging

import logfire

from ritual.config import Settings

DRIVER_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "asyncpg")


def engine_log_level(settings: Settings) -> int:
    """Level for the engine's own loggers."""
    return logging.DEBUG if settings.debug else logging.INFO


def setup_logging(settings: Settings) -> None:
    """Route stdlib log records into Logfire.

    Calling this more than once replaces the previously installed handler.

    Args:
        settings: Engine settings
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logfire.LogfireLoggingHandler):
            root.removeHandler(handler)
    root.addHandler(logfire.LogfireLoggingHandler())
    root.setLevel(logging.WARNING)

    # Query echo stays off even in debug; spans already carry the SQL
    for name in DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("ritual").setLevel(engine_log_level(settings))
