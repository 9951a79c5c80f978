"""
Output handlers: log file, colored console, and the sink that drives both.
"""

from .console import ConsoleWriter
from .file import FileWriter
from .sink import OutputSink

__all__ = [
    "ConsoleWriter",
    "FileWriter",
    "OutputSink",
]
