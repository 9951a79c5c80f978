"""
Access to the standard library logging module.

The package directory 'simplog/logging' has the same name as Python's
built-in 'logging' module, so modules in it that need the stdlib version go
through this helper. __import__ with level=0 forces the absolute import.

simplog's own diagnostics (dropped file writes, config loading) are sent to
stdlib loggers under the "simplog" namespace. That namespace carries a
NullHandler so an application that never configures logging sees nothing.
"""

stdlib_logging = __import__('logging', fromlist=[''], level=0)

INTERNAL_NAMESPACE = "simplog"

stdlib_logging.getLogger(INTERNAL_NAMESPACE).addHandler(stdlib_logging.NullHandler())


def get_internal_logger(name: str):
    """Return the stdlib logger for a simplog module (`__name__`)."""
    if name != INTERNAL_NAMESPACE and not name.startswith(INTERNAL_NAMESPACE + "."):
        name = f"{INTERNAL_NAMESPACE}.{name}"
    return stdlib_logging.getLogger(name)


def is_internal_record(record) -> bool:
    """True for records emitted by simplog itself."""
    return record.name == INTERNAL_NAMESPACE or record.name.startswith(INTERNAL_NAMESPACE + ".")
