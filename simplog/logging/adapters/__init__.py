"""
Adapters that forward other logging systems into simplog.
"""

from .stdlib import SimplogForwarder, SimplogLogContext, map_level

__all__ = [
    "SimplogForwarder",
    "SimplogLogContext",
    "map_level",
]
