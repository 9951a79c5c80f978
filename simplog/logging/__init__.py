"""
simplog Logging Core
====================

A small logging facility with:
- Timestamped records: [yyyy-mm-dd hh:mm:ss]	LABEL : message
- Level filtering against a runtime debug threshold
- Log file output plus color-coded stdout/stderr output
- Silent mode (log file only)
- 80-column line wrapping
- Symbolized stack traces
- stdlib logging forwarding

Usage:
    from simplog.logging import LogLevel, get_logger

    log = get_logger()
    log.set_log_file("server.log")
    log.write_log(LogLevel.INFO, "Listening on %s:%d", host, port)
    log.write_stack_trace()
"""

from .formatting import compose_message, get_date_string, wrap_text
from .handlers import ConsoleWriter, FileWriter, OutputSink
from .levels import Channel, LogLevel, Route, route
from .logger import (
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
from .stacktrace import (
    FrameInfoResolver,
    ProcessSymbolResolver,
    SymbolResolver,
    TraceFrame,
)

__all__ = [
    # Core
    "Simplog",
    "LogLevel",
    "Channel",
    "Route",
    "route",
    "get_logger",
    "reset_logger",
    # Operations
    "write_log",
    "write_stack_trace",
    "set_log_debug_level",
    "set_log_file",
    "set_log_silent_mode",
    "set_line_wrap",
    "load_config",
    "flush_log",
    # Formatting
    "compose_message",
    "get_date_string",
    "wrap_text",
    # Handlers
    "ConsoleWriter",
    "FileWriter",
    "OutputSink",
    # Stack traces
    "TraceFrame",
    "SymbolResolver",
    "ProcessSymbolResolver",
    "FrameInfoResolver",
    # Adapters
    "SimplogForwarder",
    "SimplogLogContext",
]


def __getattr__(name):
    """Lazy import adapters to avoid circular import issues."""
    if name in ("SimplogForwarder", "SimplogLogContext"):
        from .adapters import SimplogForwarder, SimplogLogContext
        if name == "SimplogForwarder":
            return SimplogForwarder
        return SimplogLogContext
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
