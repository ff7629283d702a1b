"""
Configuration management.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".hisendesk.yaml"
DEFAULT_LOG_DIR = Path.home() / ".hisendesk" / "logs"


def load_config_file() -> dict[str, Any]:
    """
    Load optional config from ~/.hisendesk.yaml or ./.hisendesk.yaml.
    Returns dict with log_dir (Path), verbose (bool), timeout (int), upload_probe (bool).
    Missing keys are omitted so callers can use their own defaults.
    """
    result: dict[str, Any] = {}
    candidates = [
        Path.home() / CONFIG_FILE_NAME,
        Path.cwd() / CONFIG_FILE_NAME,
    ]
    raw: Any = {}
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
    log_dir = raw.get("log_dir")
    if isinstance(log_dir, (str, Path)) and str(log_dir).strip():
        result["log_dir"] = Path(log_dir).expanduser().resolve()
    if "verbose" in raw:
        result["verbose"] = bool(raw["verbose"])
    if "timeout" in raw:
        try:
            timeout = int(raw["timeout"])
        except (TypeError, ValueError):
            timeout = 0
        # Non-positive values would fail AppConfig validation
        if timeout > 0:
            result["timeout"] = timeout
    if "upload_probe" in raw:
        result["upload_probe"] = bool(raw["upload_probe"])
    return result


class AppConfig(BaseModel):
    """Application configuration."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    log_dir: Path = Field(default=DEFAULT_LOG_DIR)
    verbose: bool = False
    timeout: int = Field(default=10, gt=0)
    upload_probe: bool = False

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
        """Ensure the log directory exists and is resolved to an absolute path."""
        self.log_dir = self.log_dir.resolve()
        self.log_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_sources(cls, **overrides: Any) -> "AppConfig":
        """
        Build a config from the optional config file, letting explicit
        (non-None) overrides win.
        """
        values = load_config_file()
        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)
