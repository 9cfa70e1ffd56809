"""Logging configuration for the pay API.

Everything ends up in a single loguru sink on stderr. Under uvicorn the sink
is human readable; in Lambda, ``PAY_API_LOG_JSON=true`` switches it to one
JSON document per line so CloudWatch can index the fields.
"""

import logging
import sys
from collections.abc import Iterable

from loguru import logger

# Libraries whose stdlib loggers follow the application level
LIBRARY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "fastapi", "mangum", "alembic", "pay_api")

SQLALCHEMY_LOGGERS = ("sqlalchemy", "sqlalchemy.engine", "sqlalchemy.engine.base", "sqlalchemy.dialects", "sqlalchemy.pool")


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records to loguru, keeping the caller's location."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def route_stdlib_logging(names: Iterable[str] | None = None) -> None:
    """Send stdlib loggers through loguru.

    Args:
        names: Loggers to redirect. Defaults to every logger created so far,
            plus the root logger.
    """
    if names is None:
        logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
        names = list(logging.Logger.manager.loggerDict)

    for name in names:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [InterceptHandler()]
        stdlib_logger.propagate = False


def setup_logging(log_level: str, json_logs: bool = False):
    """Configure loguru logging for the entire application.

    Args:
        log_level: Log level to use (from settings, which handles env vars and CLI args).
        json_logs: Emit serialized records instead of formatted lines.
    """
    log_level = log_level.upper()

    logger.remove()
    if json_logs:
        logger.add(sys.stderr, level=log_level, serialize=True)
    else:
        logger.add(sys.stderr, level=log_level, colorize=sys.stderr.isatty())

    route_stdlib_logging()
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(log_level)

    logger.info("Log level set to: {} ({} output)", log_level, "json" if json_logs else "text")


def setup_sqlalchemy_logging():
    """Route SQLAlchemy's engine and pool loggers through loguru."""
    route_stdlib_logging(SQLALCHEMY_LOGGERS)
