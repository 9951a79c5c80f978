"""
Stack Trace Symbolization
=========================

Captures the caller's stack and turns it into one multi-line TRACE record.

Resolution is a priority-ordered list of SymbolResolver attempts. The first
resolver that resolves at least one frame wins; a resolver that cannot run
raises SymbolizerError and the next one is tried. When every resolver gives
up, frames are shown as raw symbols: file(function+0xoffset) [0xaddress].

Example record body:
    StackTrace - Most recent calls appear first:
                                  handle_request (/srv/app/views.py:42)
                                  dispatch (/srv/app/router.py:17)
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
import shutil
import subprocess  # nosec B404
import sys
from typing import Protocol

from simplog.config.constants import CONTINUATION_INDENT
from simplog.core.errors import SymbolizerError

TRACE_HEADER = "StackTrace - Most recent calls appear first:"
TRUNCATED_MARKER = "[backtrace truncated]"

# Lines addr2line prints for an address it cannot map
UNKNOWN_MARKERS = frozenset({"??", "?? ??:0", "?? ??:?", "??:0", "??:?", "?? at ??:0", "?? at ??:?"})

_PACKAGE_DIR = Path(__file__).resolve().parent.parent


@dataclass
class TraceFrame:
    """
    One captured frame; `resolved` is set at most once.

    `native` marks an address that belongs to the executable image and can
    be looked up by an external symbolizer. Interpreted Python frames are
    never native.
    """

    address: int
    function: str
    filename: str
    lineno: int
    offset: int
    resolved: str | None = None
    native: bool = False

    @property
    def raw(self) -> str:
        return f"{self.filename}({self.function}+0x{self.offset:x}) [0x{self.address:x}]"

    def display(self) -> str:
        return self.resolved if self.resolved is not None else self.raw


def _is_internal(filename: str) -> bool:
    try:
        return Path(filename).resolve().is_relative_to(_PACKAGE_DIR)
    except (OSError, ValueError):
        return False


def capture_frames(limit: int) -> list[TraceFrame]:
    """
    Capture up to `limit` frames of the calling stack, most recent first.

    The capture call itself and the leading simplog frames above it are
    skipped, so the first frame is the code that asked for the trace.
    """
    frames: list[TraceFrame] = []
    frame = sys._getframe(1)
    while frame is not None and _is_internal(frame.f_code.co_filename):
        frame = frame.f_back

    while frame is not None and len(frames) < limit:
        code = frame.f_code
        frames.append(
            TraceFrame(
                address=id(code) + frame.f_lasti,
                function=code.co_name,
                filename=code.co_filename,
                lineno=frame.f_lineno or 0,
                offset=frame.f_lasti,
            )
        )
        frame = frame.f_back
    return frames


class SymbolResolver(Protocol):
    """
    Resolves captured frames into "function (file:line)" strings.

    `resolve` returns one entry per frame (None for a frame it could not
    map) or raises SymbolizerError to abandon the attempt.
    """

    name: str

    def applies_to(self, frames: Sequence[TraceFrame]) -> bool:
        ...

    def resolve(self, frames: Sequence[TraceFrame]) -> list[str | None]:
        ...


class ProcessSymbolResolver:
    """
    Resolver backed by an external addr2line-compatible tool.

    Runs `<tool> -f -p -C -e <executable> 0x<address>` once per native frame
    and reads the first line of its output. Frames without a native address
    are left unresolved.
    """

    def __init__(
        self,
        tool: str = "addr2line",
        executable: str | None = None,
        timeout: float = 2.0,
    ):
        self.tool = tool
        self.name = tool
        self.executable = executable
        self.timeout = timeout

    def applies_to(self, frames: Sequence[TraceFrame]) -> bool:
        return any(frame.native for frame in frames)

    def resolve(self, frames: Sequence[TraceFrame]) -> list[str | None]:
        tool_path = shutil.which(self.tool)
        if not tool_path:
            raise SymbolizerError(f"'{self.tool}' is not available on this system")

        executable = self.executable or sys.executable
        if not executable:
            raise SymbolizerError("Unable to determine the executable path")

        results: list[str | None] = []
        for frame in frames:
            if not frame.native:
                results.append(None)
                continue
            cmd = [tool_path, "-f", "-p", "-C", "-e", executable, f"0x{frame.address:x}"]
            try:
                completed = subprocess.run(  # nosec B603
                    cmd,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                    check=False,
                )
            except subprocess.TimeoutExpired as e:
                raise SymbolizerError(
                    f"'{self.tool}' timed out", details={"timeout": self.timeout}
                ) from e
            except (OSError, subprocess.SubprocessError) as e:
                raise SymbolizerError(
                    f"Unable to start '{self.tool}'", details={"error": str(e)}
                ) from e

            line = completed.stdout.split("\n", 1)[0].rstrip("\r\n")
            results.append(self.parse_line(line))

        if not any(results):
            raise SymbolizerError(f"'{self.tool}' could not resolve any address")
        return results

    @staticmethod
    def parse_line(line: str) -> str | None:
        """Turn "func at file:line" into "func (file:line)"; None when unknown."""
        line = line.strip()
        if not line or line in UNKNOWN_MARKERS:
            return None
        function, sep, location = line.partition(" at ")
        if not sep:
            return line
        return f"{function} ({location})"


class FrameInfoResolver:
    """Resolver using the interpreter's own code metadata."""

    name = "frame-info"

    def applies_to(self, frames: Sequence[TraceFrame]) -> bool:
        return True

    def resolve(self, frames: Sequence[TraceFrame]) -> list[str | None]:
        results = [
            f"{frame.function} ({frame.filename}:{frame.lineno})"
            if frame.filename and frame.lineno
            else None
            for frame in frames
        ]
        if not any(results):
            raise SymbolizerError("No source locations available")
        return results


def default_resolvers(symbolizer: str | None, timeout: float) -> list[SymbolResolver]:
    """External tool first (when configured), then interpreter metadata."""
    resolvers: list[SymbolResolver] = []
    if symbolizer:
        resolvers.append(ProcessSymbolResolver(symbolizer, timeout=timeout))
    resolvers.append(FrameInfoResolver())
    return resolvers


def symbolize(
    frames: list[TraceFrame],
    resolvers: Sequence[SymbolResolver],
    report: Callable[[str], None] | None = None,
) -> list[TraceFrame]:
    """
    Fill in `resolved` from the first resolver that succeeds.

    Resolvers that do not apply to the frames are skipped without a report.
    Never raises: failures are passed to `report` and the frames keep their
    raw form.
    """
    for resolver in resolvers:
        try:
            if not resolver.applies_to(frames):
                continue
            results = resolver.resolve(frames)
        except Exception as e:
            if report is not None:
                report(f"Symbol resolution with '{resolver.name}' failed: {e}")
            continue

        for frame, resolved in zip(frames, results):
            if frame.resolved is None:
                frame.resolved = resolved
        return frames

    if report is not None:
        report("Unable to symbolize stack trace, using raw symbols")
    return frames


def assemble_trace(frames: Sequence[TraceFrame], max_size: int) -> str:
    """
    Join the header and one indented line per frame.

    The result is never longer than `max_size`; when frames have to be
    dropped, TRUNCATED_MARKER is appended if it still fits.
    """
    text = TRACE_HEADER[:max_size]
    for frame in frames:
        line = f"\n{CONTINUATION_INDENT}{frame.display()}"
        if len(text) + len(line) > max_size:
            marker = f"\n{CONTINUATION_INDENT}{TRUNCATED_MARKER}"
            if len(text) + len(marker) <= max_size:
                text += marker
            break
        text += line
    return text
