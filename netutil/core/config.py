"""
Configuration management.
"""

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_LOG_DIR = Path.home() / ".netutil" / "logs"


def load_config_file() -> dict[str, Any]:
    """
    Load optional config from ~/.netutil.yaml or ./.netutil.yaml.
    Returns dict with any of: log_dir, verbose, page_size, poll_interval_ms,
    terminal_window, command_timeout, sudo_non_interactive.
    Missing or malformed keys are omitted so callers can use their own defaults.
    """
    result: dict[str, Any] = {}
    candidates = [
        Path.home() / ".netutil.yaml",
        Path.cwd() / ".netutil.yaml",
    ]
    raw: dict[str, Any] = {}
    for path in candidates:
        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    raw = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError):
                raw = {}
            break
    if not isinstance(raw, dict) or not raw:
        return result
    if "log_dir" in raw and raw["log_dir"]:
        result["log_dir"] = Path(str(raw["log_dir"])).expanduser().resolve()
    if "verbose" in raw:
        result["verbose"] = bool(raw["verbose"])
    if "sudo_non_interactive" in raw:
        result["sudo_non_interactive"] = bool(raw["sudo_non_interactive"])
    for key in ("page_size", "poll_interval_ms", "terminal_window", "command_timeout"):
        if key in raw:
            try:
                value = int(raw[key])
            except (TypeError, ValueError):
                continue
            if value > 0:
                result[key] = value
    return result


class AppConfig(BaseModel):
    """Application configuration."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    log_dir: Path = Field(default=DEFAULT_LOG_DIR)
    verbose: bool = False
    page_size: int = Field(default=20, ge=1)
    poll_interval_ms: int = Field(default=100, gt=0)
    terminal_window: int = Field(default=20, ge=1)
    # None keeps external commands blocking until they exit
    command_timeout: Optional[int] = Field(default=None, gt=0)
    sudo_non_interactive: bool = False

    @field_validator("log_dir", mode="before")
    @classmethod
    def validate_log_dir(cls, v):
        """Validate and convert log_dir to Path."""
        if v is None:
            return DEFAULT_LOG_DIR
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v
        return DEFAULT_LOG_DIR

    def model_post_init(self, __context):
        """Ensure log directory exists and is resolved to absolute path."""
        self.log_dir = self.log_dir.resolve()
        self.log_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_sources(cls, **overrides: Any) -> "AppConfig":
        """
        Build a config from the optional YAML file, then explicit overrides.

        Overrides whose value is None are ignored so unset CLI flags fall
        through to the file and then to the model defaults.
        """
        values = load_config_file()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
