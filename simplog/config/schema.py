from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from simplog.config.defaults import DEFAULTS


class LogSettings(BaseModel):
    """
    Settings read by every log call.

    One instance is owned by each Simplog facade and handed to the pipeline
    explicitly; the pipeline itself never mutates it.
    """

    log_file: Path = Path(DEFAULTS["log_file"])
    debug_level: int = DEFAULTS["debug_level"]
    silent: bool = DEFAULTS["silent"]
    line_wrap: bool = DEFAULTS["line_wrap"]
    max_message_size: int = Field(default=DEFAULTS["max_message_size"], gt=0)
    max_frames: int = Field(default=DEFAULTS["max_frames"], gt=0)
    max_trace_size: int = Field(default=DEFAULTS["max_trace_size"], gt=0)
    symbolizer: str | None = DEFAULTS["symbolizer"]
    symbolizer_timeout: float = Field(default=DEFAULTS["symbolizer_timeout"], gt=0)
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    # Accessors consumed by the pipeline

    def current_debug_threshold(self) -> int:
        return self.debug_level

    def target_file_path(self) -> Path:
        return self.log_file

    def is_silent(self) -> bool:
        return self.silent

    def is_wrap_enabled(self) -> bool:
        return self.line_wrap
