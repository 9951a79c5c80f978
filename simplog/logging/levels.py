"""
Severity Levels and Routing
===========================

Maps a requested severity and the current debug threshold to the label,
color and console channel a record is written with.

    FATAL / ERROR      always emitted, error channel (stderr)
    INFO               always emitted, normal channel (stdout)
    WARN/DEBUG/VERBOSE emitted when threshold >= level
    LOGGER / TRACE     internal; emitted when threshold >= DEBUG, never wrapped
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class LogLevel(IntEnum):
    """Ordered severity levels. LOGGER and TRACE are internal to simplog."""

    FATAL = -2  # A fatal error has occurred: caller should exit immediately
    ERROR = -1  # An error has occurred: program may continue
    INFO = 0  # Necessary information regarding program operation
    WARN = 1  # Any circumstance that may not affect normal operation
    DEBUG = 2  # Standard debug messages
    VERBOSE = 3  # All debug messages
    LOGGER = 10  # Diagnostics about simplog itself
    TRACE = 11  # Stack traces


# Range accepted by the debug threshold
VALID_DEBUG_LEVELS = (LogLevel.INFO, LogLevel.WARN, LogLevel.DEBUG, LogLevel.VERBOSE)
DEFAULT_DEBUG_LEVEL = LogLevel.DEBUG


class Channel(Enum):
    NORMAL = "normal"
    ERROR = "error"


@dataclass(frozen=True)
class Route:
    channel: Channel
    label: str  # six columns, rendered as "<label>: "
    color: str
    wrap: bool = True
    terminate: bool = False


# ANSI color codes
COLORS = {
    LogLevel.FATAL: "\033[1;31m",  # Bold red
    LogLevel.ERROR: "\033[31m",  # Red
    LogLevel.INFO: "\033[37m",  # White
    LogLevel.WARN: "\033[33m",  # Yellow
    LogLevel.DEBUG: "\033[90m",  # Gray
    LogLevel.VERBOSE: "\033[36m",  # Cyan
    LogLevel.LOGGER: "\033[34m",  # Blue
    LogLevel.TRACE: "\033[35m",  # Magenta
}
RESET = "\033[0m"

_ROUTES = {
    LogLevel.FATAL: Route(Channel.ERROR, "FATAL ", COLORS[LogLevel.FATAL], terminate=True),
    LogLevel.ERROR: Route(Channel.ERROR, "ERROR ", COLORS[LogLevel.ERROR]),
    LogLevel.INFO: Route(Channel.NORMAL, "INFO  ", COLORS[LogLevel.INFO]),
    LogLevel.WARN: Route(Channel.NORMAL, "WARN  ", COLORS[LogLevel.WARN]),
    LogLevel.DEBUG: Route(Channel.NORMAL, "DEBUG ", COLORS[LogLevel.DEBUG]),
    LogLevel.VERBOSE: Route(Channel.NORMAL, "DEBUG ", COLORS[LogLevel.VERBOSE]),
    LogLevel.LOGGER: Route(Channel.NORMAL, "LOGGER", COLORS[LogLevel.LOGGER], wrap=False),
    LogLevel.TRACE: Route(Channel.NORMAL, "TRACE ", COLORS[LogLevel.TRACE], wrap=False),
}


def route(level: int, threshold: int) -> Route | None:
    """
    Decide whether a record at `level` is emitted under `threshold`.

    Returns the Route to write it with, or None when the record is suppressed.
    Unknown levels are always suppressed.
    """
    try:
        level = LogLevel(level)
    except ValueError:
        return None

    if level in (LogLevel.FATAL, LogLevel.ERROR, LogLevel.INFO):
        return _ROUTES[level]
    if level in (LogLevel.LOGGER, LogLevel.TRACE):
        return _ROUTES[level] if threshold >= LogLevel.DEBUG else None
    return _ROUTES[level] if threshold >= level else None


def is_valid_debug_level(level: int) -> bool:
    return LogLevel.INFO <= level <= LogLevel.VERBOSE
