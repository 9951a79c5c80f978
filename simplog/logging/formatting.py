"""
Record Formatting
=================

Pure text helpers used by the pipeline:

- get_date_string: fixed-width "[yyyy-mm-dd hh:mm:ss]" timestamp
- compose_message: printf-style expansion with a byte ceiling
- errno_suffix: aligned "errno : ..." line for FATAL/ERROR records
- wrap_text: 80-column reflow with an aligned continuation indent
"""

from collections.abc import Callable
from datetime import datetime
import os
import sys

from simplog.config.constants import (
    CONTINUATION_INDENT,
    DATE_FORMAT,
    DATE_WIDTH,
    LINE_WIDTH,
    TAB_SIZE,
)


def get_date_string(clock: Callable[[], datetime] = datetime.now) -> str:
    """Return the current local time as [yyyy-mm-dd hh:mm:ss]."""
    return clock().strftime(DATE_FORMAT)


def expand_format(fmt: str, args: tuple) -> str:
    """
    Expand `fmt` with `args` using %-formatting.

    With no args the format string is used verbatim, so a literal "%" in a
    plain message is left alone. Raises TypeError/ValueError/KeyError on a
    format/argument mismatch.
    """
    if not args:
        return str(fmt)
    # A single mapping argument enables %(name)s style formats
    if len(args) == 1 and isinstance(args[0], dict) and args[0]:
        return str(fmt) % args[0]
    return str(fmt) % args


def compose_message(fmt: str, args: tuple, limit: int) -> tuple[str, int | None]:
    """
    Build the message body and cap it at `limit` UTF-8 bytes.

    Returns:
        (text, truncated_by): `truncated_by` is the number of bytes discarded,
        or None when the body fit.
    """
    text = expand_format(fmt, args)
    encoded = text.encode("utf-8", errors="replace")
    if len(encoded) <= limit:
        return text, None

    # Cut on a character boundary at or below the limit
    kept = encoded[:limit].decode("utf-8", errors="ignore")
    truncated_by = len(encoded) - len(kept.encode("utf-8"))
    return kept, truncated_by


def current_errno() -> int | None:
    """Return the errno of the OSError currently being handled, if any."""
    exc = sys.exc_info()[1]
    if isinstance(exc, OSError) and exc.errno:
        return exc.errno
    return None


def errno_suffix(errno: int) -> str:
    """One line aligned with the label column: '<timestamp width>\\terrno : <text>'."""
    return f"{' ' * DATE_WIDTH}\terrno : {os.strerror(errno)}\n"


def visible_width(line: str) -> int:
    return len(line.expandtabs(TAB_SIZE))


def _break_point(prefix: str, rest: str, width: int, start: int = 1) -> int:
    """
    Index of the space in `rest` to break on, or -1 if there is none.

    Only spaces at index `start` or later are candidates. Prefers the last
    space that keeps `prefix + rest[:i]` within `width`; otherwise the first
    space after an overlong word.
    """
    i = rest.rfind(" ")
    while i >= start:
        if visible_width(prefix + rest[:i]) <= width:
            return i
        i = rest.rfind(" ", 0, i)

    # No space inside the window: never split the word, break right after it
    return rest.find(" ", start)


def _wrap_line(line: str, width: int, indent: str, start: int = 1) -> list[str]:
    if visible_width(line) <= width:
        return [line]

    lines = []
    prefix = ""
    rest = line
    while visible_width(prefix + rest) > width:
        cut = _break_point(prefix, rest, width, start)
        if cut <= 0:
            break
        lines.append(prefix + rest[:cut])
        rest = rest[cut + 1 :]
        prefix = indent
        start = 1
    lines.append(prefix + rest)
    return lines


def wrap_text(
    text: str,
    width: int = LINE_WIDTH,
    indent: str = CONTINUATION_INDENT,
    body_start: int = 0,
) -> str:
    """
    Reflow `text` so no line is wider than `width` visible columns.

    Breaks replace a space with a newline and start the continuation with
    `indent`, which lines it up under the message body. The first line is
    never broken before index `body_start`, so a record header stays whole
    and attached to the first word of its body. A word with no space before
    it inside the window is left whole. The result ends with exactly one
    newline. Must not be applied twice to the same text.
    """
    wrapped: list[str] = []
    for n, line in enumerate(text.rstrip("\n").split("\n")):
        start = max(1, body_start) if n == 0 else 1
        wrapped.extend(_wrap_line(line, width, indent, start))
    return "\n".join(wrapped) + "\n"
