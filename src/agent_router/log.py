"""Logging configuration - loguru everywhere.

Modules log with ``from loguru import logger``. The entry point calls
``setup_logging`` once; stdlib ``logging`` records (uvicorn, httpx, qdrant)
are intercepted so everything shares one sink and format.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class _InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging's own frames so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", *, intercept_stdlib: bool = True, log_file: str | None = None) -> None:
    """Configure loguru sinks for this process.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ...)
        intercept_stdlib: Route stdlib logging through loguru
        log_file: Optional path of a rotating file sink
    """
    logger.remove()
    logger.add(sys.stderr, format=_FORMAT, level=level.upper(), backtrace=True, diagnose=False)

    if log_file:
        logger.add(log_file, format=_FORMAT, level=level.upper(), rotation="10 MB", retention="7 days")

    if intercept_stdlib:
        logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    logger.debug("Logging configured: level={}", level)


__all__ = ["setup_logging"]
