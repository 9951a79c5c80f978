"""
Utilities package.
"""

from .config_manager import ConfigLoader, parse_bool

__all__ = [
    "ConfigLoader",
    "parse_bool",
]
