import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
import yaml

from simplog.config.constants import CONFIG_KEYS, FALSE_VALUES, TRUE_VALUES
from simplog.core.errors import ConfigError
from simplog.logging._stdlib_logging import get_internal_logger
from simplog.logging.levels import LogLevel

logger = get_internal_logger(__name__)

ENV_PREFIX = "SIMPLOG_"


def parse_bool(value: str) -> bool:
    """Parse a config flag; raises ValueError for anything unrecognized."""
    v = str(value).strip().lower()
    if v in TRUE_VALUES:
        return True
    if v in FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


class ConfigLoader:
    """
    Reads simplog settings from a configuration file or the environment and
    applies them through a Simplog instance's setters.

    Supported sources:
    - plain key=value files (one setting per line, '#' comments)
    - YAML files (.yaml/.yml), settings optionally nested under 'simplog:'
    - SIMPLOG_DEBUG / SIMPLOG_LOGFILE / SIMPLOG_SILENT / SIMPLOG_WRAP

    Recognized keys: debug, logfile, silent, wrap. Unknown keys and
    malformed values are reported as ERROR records and skipped.
    """

    def _load_env_file(self, path: Path) -> dict[str, str]:
        """
        Load key=value lines into a mapping.

        Keys with no value are omitted.
        """
        return {k: str(v) for k, v in dotenv_values(path).items() if v is not None}

    def _read_yaml(self, path: Path) -> dict[str, str]:
        """
        Load a YAML configuration mapping.

        Raises:
            ConfigError: If the document is not a mapping.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if isinstance(data, dict) and isinstance(data.get("simplog"), dict):
            data = data["simplog"]
        if not isinstance(data, dict):
            raise ConfigError("Config must be a mapping", details={"path": str(path)})
        return {str(k): str(v) for k, v in data.items() if v is not None}

    def read(self, path: str | Path) -> dict[str, str]:
        """
        Read raw settings from `path`.

        Raises:
            ConfigError: If the file is missing, unreadable or malformed.
        """
        path = Path(path)
        if not path.is_file():
            raise ConfigError("Config file not found", details={"path": str(path)})

        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                return self._read_yaml(path)
            return self._load_env_file(path)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise ConfigError("Unable to read config file", details={"path": str(path), "error": str(e)}) from e

    def load(self, path: str | Path, log: Any) -> None:
        """Read `path` and apply it to `log`."""
        values = self.read(path)
        logger.debug("Loaded %d setting(s) from %s", len(values), path)
        self.apply(values, log, source=str(path))

    def apply_env(self, log: Any) -> None:
        """Apply SIMPLOG_* environment overrides to `log`."""
        values = {
            key: os.environ[f"{ENV_PREFIX}{key.upper()}"]
            for key in CONFIG_KEYS
            if os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        }
        if values:
            self.apply(values, log, source="environment")

    def apply(self, values: dict[str, str], log: Any, source: str) -> None:
        for key, value in values.items():
            name = key.strip().lower()
            value = value.strip()
            try:
                if name == "debug":
                    log.set_log_debug_level(int(value))
                elif name == "logfile":
                    if not value:
                        raise ValueError("empty path")
                    log.set_log_file(value)
                elif name == "silent":
                    log.set_log_silent_mode(parse_bool(value))
                elif name == "wrap":
                    log.set_line_wrap(parse_bool(value))
                else:
                    log.write_log(LogLevel.ERROR, "Invalid key '%s' in config (%s)", key, source)
            except ValueError:
                log.write_log(
                    LogLevel.ERROR,
                    "Invalid value '%s' for key '%s' in config (%s)",
                    value,
                    key,
                    source,
                )
