"""
Output Sink
===========

Dual-channel delivery of a formatted record: always to the log file, and
to the console unless silent mode is on. Both channels receive the same text.
"""

from pathlib import Path

from ..levels import Channel
from .console import ConsoleWriter
from .file import FileWriter


class OutputSink:
    def __init__(
        self,
        console: ConsoleWriter | None = None,
        file_writer: FileWriter | None = None,
    ):
        self.console = console or ConsoleWriter()
        self.file_writer = file_writer or FileWriter()

    def emit(self, channel: Channel, color: str, text: str, log_file: Path, silent: bool) -> None:
        self.file_writer.write(log_file, text)
        if not silent:
            self.console.write(channel, color, text)
