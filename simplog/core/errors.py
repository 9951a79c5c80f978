"""
Base exception classes for consistent error handling across simplog.
Distinguishes configuration problems from the one fatal condition the
facility reports itself (an unwritable log destination during a flush).
"""

from typing import Any, Dict, Optional


class SimplogError(Exception):
    """Base class for all simplog errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ConfigError(SimplogError):
    """Raised when a configuration file cannot be read or parsed."""

    pass


class LogFlushError(SimplogError):
    """Raised when the log file cannot be removed or recreated during a flush."""

    pass


class SymbolizerError(SimplogError):
    """Raised by a symbol resolver that cannot resolve the captured frames."""

    pass
