"""
Core Logger Implementation
==========================

Timestamped, colorized logging to a log file and the console.

Every call runs the same synchronous pipeline:

    compose message -> route by level/threshold -> wrap (ordinary levels)
    -> write to log file and, unless silent, to stdout/stderr

Example outputs:
    [2013-12-01 09:30:00]	INFO  : Server started on port 8080
    [2013-12-01 09:30:02]	WARN  : Cache miss ratio above 0.5
    [2013-12-01 09:30:05]	ERROR : Unable to open spool directory
                         	errno : No such file or directory

Usage:
    from simplog import LogLevel, get_logger

    log = get_logger()
    log.write_log(LogLevel.INFO, "value=%d", 42)
    log.write_stack_trace()

FATAL records are written like ERROR records; the caller is expected to exit
afterwards (write_log returns a Route with terminate=True).
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path
import sys

from simplog.config.constants import CONTINUATION_INDENT
from simplog.config.schema import LogSettings
from simplog.core.errors import LogFlushError

from .formatting import (
    compose_message,
    current_errno,
    errno_suffix,
    get_date_string,
    wrap_text,
)
from .handlers import OutputSink
from .levels import (
    DEFAULT_DEBUG_LEVEL,
    LogLevel,
    Route,
    is_valid_debug_level,
    route,
)
from .stacktrace import (
    SymbolResolver,
    assemble_trace,
    capture_frames,
    default_resolvers,
    symbolize,
)

TRUNCATION_MESSAGE = "Previous message truncated by %d bytes to fit into the message buffer"

INVALID_LEVEL_MESSAGE = (
    "Invalid debug level of '%s'. Setting to default value of '%d'\n"
    f"{CONTINUATION_INDENT}Valid Debug Levels:\n"
    f"{CONTINUATION_INDENT}0  : Info\n"
    f"{CONTINUATION_INDENT}1  : Warnings\n"
    f"{CONTINUATION_INDENT}2  : Debug\n"
    f"{CONTINUATION_INDENT}3  : Debug-Verbose"
)


class Simplog:
    """
    Logging facade bound to one LogSettings instance.

    Features:
    - Level filtering against a runtime debug threshold
    - Bounded message composition with truncation reporting
    - 80-column line wrapping aligned under the message body
    - Log file plus colored stdout/stderr output, with a silent mode
    - Symbolized stack traces

    Usage:
        log = Simplog(LogSettings(log_file="app.log"))
        log.write_log(LogLevel.WARN, "retrying %s", url)
    """

    def __init__(
        self,
        settings: LogSettings | None = None,
        sink: OutputSink | None = None,
        clock: Callable[[], datetime] = datetime.now,
        resolvers: Sequence[SymbolResolver] | None = None,
    ):
        """
        Args:
            settings: Settings read on every call (defaults when omitted)
            sink: Output destination (log file + sys.stdout/sys.stderr by default)
            clock: Wall-clock source for timestamps
            resolvers: Symbol resolvers for stack traces, tried in order.
                Defaults to the configured external tool, then frame metadata.
        """
        self.settings = settings or LogSettings()
        self.sink = sink or OutputSink()
        self.clock = clock
        self.resolvers = resolvers

    # Pipeline

    def write_log(self, level: int, fmt: str, *args: object) -> Route | None:
        """
        Write one record.

        Args:
            level: LogLevel (or its integer value)
            fmt: printf-style format string
            *args: Values for the format string

        Returns:
            The Route the record was written with, or None if suppressed.
        """
        rt = route(level, self.settings.current_debug_threshold())
        if rt is None:
            return None

        errno = current_errno() if level in (LogLevel.FATAL, LogLevel.ERROR) else None

        # Internal diagnostics are exempt from the message ceiling
        limit = self.settings.max_message_size if level != LogLevel.LOGGER else sys.maxsize

        format_error = None
        try:
            body, truncated_by = compose_message(fmt, args, limit)
        except (TypeError, ValueError, KeyError) as e:
            format_error = e
            body, truncated_by = compose_message("%s %r", (fmt, args), limit)

        self._emit(rt, body, errno)

        if format_error is not None and level != LogLevel.LOGGER:
            self.write_log(LogLevel.LOGGER, "Unable to format previous message: %s", format_error)
        if truncated_by:
            self.write_log(LogLevel.LOGGER, TRUNCATION_MESSAGE, truncated_by)
        return rt

    def write_stack_trace(self) -> None:
        """Write the caller's stack, most recent call first, as a TRACE record."""
        rt = route(LogLevel.TRACE, self.settings.current_debug_threshold())
        if rt is None:
            return

        frames = capture_frames(self.settings.max_frames)
        resolvers = self.resolvers
        if resolvers is None:
            resolvers = default_resolvers(
                self.settings.symbolizer, self.settings.symbolizer_timeout
            )
        symbolize(frames, resolvers, report=self._report)
        self._emit(rt, assemble_trace(frames, self.settings.max_trace_size), None)

    def _report(self, message: str) -> None:
        self.write_log(LogLevel.LOGGER, "%s", message)

    def _emit(self, rt: Route, body: str, errno: int | None) -> None:
        header = f"{get_date_string(self.clock)}\t{rt.label}: "
        text = header + body
        if rt.wrap and self.settings.is_wrap_enabled():
            text = wrap_text(text, body_start=len(header))
        else:
            text = text.rstrip("\n") + "\n"
        if errno is not None:
            text += errno_suffix(errno)

        self.sink.emit(
            rt.channel,
            rt.color,
            text,
            self.settings.target_file_path(),
            self.settings.is_silent(),
        )

    # Settings

    def set_log_debug_level(self, level: int) -> bool:
        """
        Set the debug threshold (0: Info, 1: Warnings, 2: Debug, 3: Debug-Verbose).

        An invalid level resets the threshold to DEBUG and writes an ERROR
        record listing the valid levels. Returns whether `level` was accepted.
        """
        if isinstance(level, int) and not isinstance(level, bool) and is_valid_debug_level(level):
            self.settings.debug_level = int(level)
            return True

        self.settings.debug_level = int(DEFAULT_DEBUG_LEVEL)
        self.write_log(LogLevel.ERROR, INVALID_LEVEL_MESSAGE, level, int(DEFAULT_DEBUG_LEVEL))
        return False

    def set_log_file(self, path: str | Path) -> None:
        self.settings.log_file = Path(path)
        self.write_log(LogLevel.LOGGER, "Log file set to '%s'", path)

    def set_log_silent_mode(self, silent: bool) -> None:
        """
        Enable/disable silent mode. When enabled nothing is written to the
        console; log file output continues normally.

        The mode changes before the announcement is written, so "Silent mode
        enabled" only reaches the log file.
        """
        self.settings.silent = bool(silent)
        self.write_log(LogLevel.LOGGER, "Silent mode %s", "enabled" if silent else "disabled")

    def set_line_wrap(self, enabled: bool) -> None:
        self.settings.line_wrap = enabled
        self.write_log(LogLevel.LOGGER, "Line wrapping %s", "enabled" if enabled else "disabled")

    def load_config(self, path: str | Path) -> None:
        """Apply a key=value or YAML configuration file. See simplog.utils.config_manager."""
        from simplog.utils.config_manager import ConfigLoader

        ConfigLoader().load(path, self)

    # Log file maintenance

    def flush_log(self) -> None:
        """
        Empty the log file by deleting and recreating it.

        If the file cannot be removed or recreated, the error is written to
        stderr and the process exits with status 1.
        """
        path = self.settings.target_file_path()
        if not path.exists():
            stdout = self.sink.console.stdout
            stdout.write(
                f"{get_date_string(self.clock)}\tERROR : Logfile '{path}' does not exist. "
                "It will be created now.\n"
            )
            stdout.flush()

        try:
            self._recreate_log_file(path)
        except LogFlushError as e:
            stderr = self.sink.console.stderr
            stderr.write(f"ERROR: Unable to flush logfile! {e}\n")
            stderr.flush()
            sys.exit(1)

    @staticmethod
    def _recreate_log_file(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
            path.touch()
        except OSError as e:
            raise LogFlushError(
                f"{e.strerror or e}", details={"path": str(path)}
            ) from e


# Process-wide default instance used by the module-level functions
_default_logger: Simplog | None = None


def get_logger() -> Simplog:
    """
    Get or create the process-wide Simplog instance.

    On first use the instance picks up SIMPLOG_* environment overrides.
    """
    global _default_logger

    if _default_logger is None:
        from simplog.utils.config_manager import ConfigLoader

        _default_logger = Simplog()
        ConfigLoader().apply_env(_default_logger)
    return _default_logger


def reset_logger() -> None:
    """Drop the process-wide instance; the next get_logger() creates a fresh one."""
    global _default_logger

    _default_logger = None


def write_log(level: int, fmt: str, *args: object) -> Route | None:
    return get_logger().write_log(level, fmt, *args)


def write_stack_trace() -> None:
    get_logger().write_stack_trace()


def set_log_debug_level(level: int) -> bool:
    return get_logger().set_log_debug_level(level)


def set_log_file(path: str | Path) -> None:
    get_logger().set_log_file(path)


def set_log_silent_mode(silent: bool) -> None:
    get_logger().set_log_silent_mode(silent)


def set_line_wrap(enabled: bool) -> None:
    get_logger().set_line_wrap(enabled)


def load_config(path: str | Path) -> None:
    get_logger().load_config(path)


def flush_log() -> None:
    get_logger().flush_log()
