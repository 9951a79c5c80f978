"""
Default Configuration Values
===========================

Default settings for simplog.
These are overridden by explicit setter calls, a configuration file, or
SIMPLOG_* environment variables.
"""

from typing import Any, Dict

# Default configuration values
DEFAULTS: Dict[str, Any] = {
    "log_file": "default.log",
    "debug_level": 2,  # LogLevel.DEBUG
    "silent": False,
    "line_wrap": True,
    "max_message_size": 4096,  # bytes of composed message body
    "max_frames": 15,
    "max_trace_size": 4096,
    "symbolizer": "addr2line",
    "symbolizer_timeout": 2.0,  # seconds per resolver subprocess
}
