"""
Bookstore logging setup.

Routes every log record through loguru:
- One stderr sink, human-readable or JSON
- A request_id field on every record (filled by the request middleware)
- Standard library logging (uvicorn, SQLAlchemy) intercepted into loguru
"""
from __future__ import annotations

import logging
import sys

from loguru import logger

_PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Access lines come from RequestContextMiddleware
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Reset loguru sinks and intercept stdlib logging.

    Safe to call more than once; each call replaces the previous sinks.
    """
    logger.remove()
    logger.configure(extra={"request_id": "-"})

    logger.add(
        sys.stderr,
        level=level,
        format="{message}" if json else _PLAIN_FORMAT,
        serialize=json,
        colorize=not json,
        backtrace=False,
        diagnose=False,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    logger.info("Logging configured (level={}, json={})", level, json)
