"""
simplog
=======

A process-local logger: timestamped, colorized records to a log file and
the console, with on-demand stack traces.

Usage:
    import simplog
    from simplog import LogLevel

    simplog.set_log_debug_level(LogLevel.VERBOSE)
    simplog.write_log(LogLevel.INFO, "value=%d", 42)
    simplog.write_stack_trace()
"""

from simplog.config.schema import LogSettings
from simplog.core.errors import ConfigError, LogFlushError, SimplogError
from simplog.logging import (
    LogLevel,
    Simplog,
    flush_log,
    get_logger,
    load_config,
    reset_logger,
    set_line_wrap,
    set_log_debug_level,
    set_log_file,
    set_log_silent_mode,
    write_log,
    write_stack_trace,
)

__version__ = "1.0.0"

__all__ = [
    "LogLevel",
    "LogSettings",
    "Simplog",
    "get_logger",
    "reset_logger",
    "write_log",
    "write_stack_trace",
    "set_log_debug_level",
    "set_log_file",
    "set_log_silent_mode",
    "set_line_wrap",
    "load_config",
    "flush_log",
    "SimplogError",
    "ConfigError",
    "LogFlushError",
]
