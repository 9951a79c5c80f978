from datetime import datetime
import io
import os
from pathlib import Path
from typing import Generator
from unittest.mock import patch

import pytest

from simplog.config.schema import LogSettings
from simplog.logging.handlers import ConsoleWriter, OutputSink
from simplog.logging.logger import Simplog, reset_logger

FIXED_TIME = datetime(2013, 12, 1, 9, 5, 3)
DATE = "[2013-12-01 09:05:03]"


@pytest.fixture(autouse=True)
def clean_env() -> Generator[None, None, None]:
    """
    Strip SIMPLOG_* variables and reset the process-wide logger so tests do
    not depend on the local environment or on each other.
    """
    env = {k: v for k, v in os.environ.items() if not k.startswith("SIMPLOG_")}
    with patch.dict(os.environ, env, clear=True):
        reset_logger()
        yield
        reset_logger()


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "test.log"


@pytest.fixture
def stdout() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def stderr() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def settings(log_path: Path) -> LogSettings:
    # No external symbolizer: keeps trace tests off subprocesses
    return LogSettings(log_file=log_path, symbolizer=None)


@pytest.fixture
def log(settings: LogSettings, stdout: io.StringIO, stderr: io.StringIO) -> Simplog:
    """Simplog writing to a temp file and in-memory console streams at a fixed time."""
    sink = OutputSink(console=ConsoleWriter(stdout=stdout, stderr=stderr))
    return Simplog(settings=settings, sink=sink, clock=lambda: FIXED_TIME)


def read_records(path: Path) -> list[str]:
    """Split a log file into records (a record starts with the timestamp)."""
    if not path.exists():
        return []
    records: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines(keepends=True):
        if line.startswith("[") or not records:
            records.append(line)
        else:
            records[-1] += line
    return records


@pytest.fixture
def records(log_path: Path):
    """Callable returning the records currently in the test log file."""
    return lambda: read_records(log_path)
