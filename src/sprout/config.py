"""Configuration loading from environment variables and sprout.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_DATA_DIR = Path.home() / "Desktop" / "plant_tracker_data"
_LOG_FILENAME = "plant_tracker_log.txt"
_CONFIG_FILENAME = "sprout.toml"


@dataclass
class SproutConfig:
    """Top-level Sprout configuration."""

    data_dir: Path = _DEFAULT_DATA_DIR
    log_file: Path = _DEFAULT_DATA_DIR / _LOG_FILENAME
    date_format: str = "%Y-%m-%d"
    log_level: str = "WARNING"


def load_config(config_path: Path | None = None) -> SproutConfig:
    """Load configuration from environment variables and optional sprout.toml.

    Priority: environment variables > sprout.toml > defaults. The event log
    defaults to a file inside the data directory.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    else:
        # Search current dir and ~/.sprout/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".sprout" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text(encoding="utf-8"))
                break

    data_dir = Path(
        os.getenv("SPROUT_DATA_DIR", file_data.get("data_dir", str(_DEFAULT_DATA_DIR)))
    ).expanduser()
    log_file = os.getenv("SPROUT_LOG_FILE", file_data.get("log_file"))

    return SproutConfig(
        data_dir=data_dir,
        log_file=Path(log_file).expanduser() if log_file else data_dir / _LOG_FILENAME,
        date_format=os.getenv("SPROUT_DATE_FORMAT", file_data.get("date_format", "%Y-%m-%d")),
        log_level=os.getenv("SPROUT_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
