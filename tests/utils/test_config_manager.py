import os
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from simplog.core.errors import ConfigError
from simplog.logging.levels import LogLevel
from simplog.logging.logger import Simplog
from simplog.utils.config_manager import ConfigLoader, parse_bool


def write_config(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestConfigLoader:
    """Test suite for configuration file loading."""

    def test_key_value_file(self, log: Simplog, tmp_path: Path):
        target = tmp_path / "logs" / "app.log"
        cfg = write_config(
            tmp_path / "simplog.conf",
            f"# simplog settings\ndebug=3\nlogfile={target}\nsilent=true\nwrap=false\n",
        )
        log.load_config(cfg)

        assert log.settings.debug_level == LogLevel.VERBOSE
        assert log.settings.log_file == target
        assert log.settings.silent is True
        assert log.settings.line_wrap is False

    def test_yaml_file_with_section(self, log: Simplog, tmp_path: Path):
        cfg = tmp_path / "simplog.yaml"
        cfg.write_text(
            yaml.safe_dump({"simplog": {"debug": 1, "wrap": False}}, sort_keys=False),
            encoding="utf-8",
        )
        log.load_config(cfg)

        assert log.settings.debug_level == LogLevel.WARN
        assert log.settings.line_wrap is False

    def test_yaml_file_without_section(self, log: Simplog, tmp_path: Path):
        cfg = write_config(tmp_path / "simplog.yml", "debug: 0\nsilent: yes\n")
        log.load_config(cfg)

        assert log.settings.debug_level == LogLevel.INFO
        assert log.settings.silent is True

    def test_yaml_must_be_a_mapping(self, tmp_path: Path):
        cfg = write_config(tmp_path / "bad.yaml", "- debug\n- silent\n")
        with pytest.raises(ConfigError, match="mapping"):
            ConfigLoader().read(cfg)

    def test_malformed_yaml(self, tmp_path: Path):
        cfg = write_config(tmp_path / "bad.yaml", "debug: [1, 2\n")
        with pytest.raises(ConfigError, match="Unable to read"):
            ConfigLoader().read(cfg)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader().read(tmp_path / "nope.conf")
        assert exc_info.value.details["path"].endswith("nope.conf")

    def test_unknown_key_is_reported(self, log: Simplog, tmp_path: Path, records):
        cfg = write_config(tmp_path / "simplog.conf", "colour=blue\n")
        log.load_config(cfg)

        (record,) = records()
        assert "ERROR : Invalid key 'colour'" in record

    def test_bad_boolean_is_reported_and_skipped(self, log: Simplog, tmp_path: Path, records):
        cfg = write_config(tmp_path / "simplog.conf", "silent=maybe\n")
        log.load_config(cfg)

        assert log.settings.silent is False
        (record,) = records()
        assert "Invalid value 'maybe' for key 'silent'" in record

    def test_out_of_range_debug_goes_through_setter(self, log: Simplog, tmp_path: Path, records):
        cfg = write_config(tmp_path / "simplog.conf", "debug=7\n")
        log.load_config(cfg)

        assert log.settings.debug_level == LogLevel.DEBUG
        assert "Invalid debug level of '7'" in records()[0]

    def test_non_numeric_debug(self, log: Simplog, tmp_path: Path, records):
        cfg = write_config(tmp_path / "simplog.conf", "debug=loud\n")
        log.load_config(cfg)

        assert log.settings.debug_level == LogLevel.DEBUG
        assert "Invalid value 'loud' for key 'debug'" in records()[0]

    def test_apply_env(self, log: Simplog):
        with patch.dict(os.environ, {"SIMPLOG_DEBUG": "1", "SIMPLOG_WRAP": "off"}):
            ConfigLoader().apply_env(log)

        assert log.settings.debug_level == LogLevel.WARN
        assert log.settings.line_wrap is False

    def test_apply_env_without_variables(self, log: Simplog, records):
        ConfigLoader().apply_env(log)
        assert records() == []


@pytest.mark.parametrize("value", ["1", "true", "Yes", " ON "])
def test_parse_bool_true(value: str):
    assert parse_bool(value) is True


@pytest.mark.parametrize("value", ["0", "false", "No", "off"])
def test_parse_bool_false(value: str):
    assert parse_bool(value) is False


def test_parse_bool_rejects_other_values():
    with pytest.raises(ValueError):
        parse_bool("sometimes")
