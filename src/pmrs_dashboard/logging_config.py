"""Route every log record of the dashboard and the echo server through loguru.

uvicorn, fastapi and httpx log through the stdlib ``logging`` module. Their
records are forwarded to the single loguru sink that ``setup_logging``
installs, so both processes share one format and one level threshold.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

from pmrs_dashboard.config import LoggingSettings

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_FORWARDED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "httpx", "httpcore")

# httpx logs one INFO line per upstream request; shown only when debugging.
_QUIET_UNLESS_DEBUG = frozenset({"httpx", "httpcore"})


class LoguruForwarder(logging.Handler):
    """Re-emit a stdlib ``LogRecord`` on loguru, keeping its level and caller."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore[assignment]
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _stdlib_threshold(logger_name: str, threshold: int) -> int:
    if logger_name in _QUIET_UNLESS_DEBUG and threshold > logging.DEBUG:
        return max(threshold, logging.WARNING)
    return threshold


def setup_logging(settings: LoggingSettings) -> None:
    """Install the loguru sink for ``settings`` and forward stdlib loggers to it.

    ``settings.log_level`` drives both the loguru sink and the stdlib
    loggers, so records below the threshold are dropped before formatting.
    """
    threshold = logging.getLevelNamesMapping()[settings.log_level]

    logger.remove()
    if settings.log_json:
        logger.add(sys.stderr, level=settings.log_level, serialize=True)
    else:
        logger.add(sys.stderr, level=settings.log_level, format=_CONSOLE_FORMAT, colorize=True)

    forwarder = LoguruForwarder()
    for name in _FORWARDED_LOGGERS:
        stdlib_logger = logging.getLogger(name)
        stdlib_logger.handlers = [forwarder]
        stdlib_logger.propagate = False
        stdlib_logger.setLevel(_stdlib_threshold(name, threshold))

    logging.root.handlers = [forwarder]
    logging.root.setLevel(threshold)
