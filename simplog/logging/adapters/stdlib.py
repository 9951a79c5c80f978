#!/usr/bin/env python
"""
Standard Library Log Forwarder
==============================

Forwards records from Python's `logging` module into simplog, so third-party
libraries end up in the same log file with the same format.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING

from .._stdlib_logging import is_internal_record, stdlib_logging
from ..levels import LogLevel

if TYPE_CHECKING:
    from ..logger import Simplog


def map_level(levelno: int) -> LogLevel:
    """Map a stdlib logging level number onto a simplog level."""
    if levelno >= logging.CRITICAL:
        return LogLevel.FATAL
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARN
    if levelno >= logging.INFO:
        return LogLevel.INFO
    if levelno >= logging.DEBUG:
        return LogLevel.DEBUG
    return LogLevel.VERBOSE


class SimplogForwarder(stdlib_logging.Handler):
    """
    Handler that forwards stdlib logger messages to a Simplog instance.
    """

    def __init__(self, log: Simplog, add_prefix: bool = True):
        """
        Args:
            log: Simplog instance to write to.
            add_prefix: Whether to add a [logger.name] prefix to messages.
        """
        super().__init__()
        self.log = log
        self.add_prefix = add_prefix
        self.setLevel(stdlib_logging.NOTSET)

    def emit(self, record: stdlib_logging.LogRecord) -> None:
        """Forward log record to simplog with level mapping."""
        # simplog's own diagnostics would loop back into it
        if is_internal_record(record):
            return
        try:
            message = record.getMessage()
            if self.add_prefix:
                message = f"[{record.name}] {message}"
            # Already expanded; pass through "%s" so stray '%' stay literal
            self.log.write_log(map_level(record.levelno), "%s", message)
        except Exception:
            self.handleError(record)


@contextmanager
def SimplogLogContext(logger_name: str | None = None, log: Simplog | None = None):
    """
    Context manager for stdlib log forwarding.

    Args:
        logger_name: stdlib logger to capture (root logger when None).
        log: Target Simplog instance (process-wide default when None).
    """
    from ..logger import get_logger

    handler = SimplogForwarder(log or get_logger())

    target_logger = logging.getLogger(logger_name)
    previous_level = target_logger.level
    target_logger.addHandler(handler)
    target_logger.setLevel(logging.DEBUG)

    try:
        yield handler
    finally:
        target_logger.removeHandler(handler)
        target_logger.setLevel(previous_level)
        handler.close()
