"""
File Log Handler
================

Append-only log file output. The file is opened, written and closed within
each call; a file that cannot be opened drops the write.
"""

from pathlib import Path

from .._stdlib_logging import get_internal_logger

logger = get_internal_logger(__name__)


class FileWriter:
    """Appends records to the log file, creating it if needed."""

    def write(self, path: Path, text: str) -> bool:
        """Return True if the text reached the file."""
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            logger.debug("Dropped log file write to %s: %s", path, e)
            return False
        return True
