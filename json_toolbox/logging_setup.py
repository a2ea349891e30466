"""Logging configuration using loguru.

Standard `logging` records (Gradio, httpx, uvicorn) are routed into loguru so
the app has a single output format.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional

from loguru import logger

from .settings import get_settings

log = logger.bind(name=__name__)

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>|"
    "<level>{level:5}</level>|"
    "<cyan>{extra[name]}</cyan>|"
    "<level>{message}</level>"
)

LOG_FORMAT_FILE = "{time:YYYY-MM-DD HH:mm:ss.SSS}|{level:5}|{extra[name]}|{message}"

INTERCEPTED_LOGGERS = ("gradio", "httpx", "httpcore", "uvicorn", "uvicorn.access", "uvicorn.error")


class InterceptHandler(logging.Handler):
    """Forward standard logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.bind(name=record.name).opt(exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    settings = get_settings()
    effective_level = (level or settings.log_level).upper()
    target_file = log_file or settings.log_file

    logger.remove()
    logger.configure(extra={"name": "json-toolbox"})
    logger.add(sys.stderr, format=LOG_FORMAT, level=effective_level, colorize=True)

    if target_file:
        logger.add(
            target_file,
            format=LOG_FORMAT_FILE,
            level=effective_level,
            rotation="10 MB",
            retention="7 days",
            enqueue=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in INTERCEPTED_LOGGERS:
        lib_log = logging.getLogger(name)
        lib_log.handlers = [InterceptHandler()]
        lib_log.propagate = False
    logging.getLogger("httpx").setLevel(logging.WARNING)

    log.info("Logging initialized: level={}, file={}", effective_level, target_file or "-")
