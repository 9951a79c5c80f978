"""
Console Log Handler
===================

Color-coded console output. Every write is followed by a color reset on
both stdout and stderr so the terminal is never left colored.
"""

import sys
from typing import TextIO

from .._stdlib_logging import get_internal_logger
from ..levels import RESET, Channel

logger = get_internal_logger(__name__)


class ConsoleWriter:
    """
    Writes records to stdout (normal channel) or stderr (error channel).

    Streams default to the current sys.stdout/sys.stderr at write time, so
    redirections made after construction are honored.
    """

    def __init__(self, stdout: TextIO | None = None, stderr: TextIO | None = None):
        self._stdout = stdout
        self._stderr = stderr

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def write(self, channel: Channel, color: str, text: str) -> None:
        """Write one record. A closed or broken stream drops the output."""
        stream = self.stderr if channel is Channel.ERROR else self.stdout
        self._write(stream, f"{color}{text}")

        # Reset once per call on both streams, whichever one was used
        for reset_stream in (self.stdout, self.stderr):
            self._write(reset_stream, RESET)

    @staticmethod
    def _write(stream: TextIO, data: str) -> None:
        try:
            stream.write(data)
            stream.flush()
        except (OSError, ValueError) as e:
            logger.debug("Dropped console write: %s", e)
