"""Configuration loading from environment variables and jetjot.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

from jetjot.errors import ConfigurationError

_APP_DIR = Path.home() / ".jetjot"
_DEFAULT_RECENTS_FILE = _APP_DIR / "recents.json"
_DEFAULT_PROJECTS_DIR = Path.home() / "JetJot"
_CONFIG_FILENAME = "jetjot.toml"

DEFAULT_MAX_RECENTS = 5


@dataclass
class JetJotConfig:
    """Top-level JetJot configuration."""

    recents_file: Path = _DEFAULT_RECENTS_FILE
    max_recents: int = DEFAULT_MAX_RECENTS
    projects_dir: Path = _DEFAULT_PROJECTS_DIR
    log_level: str = "INFO"


def _positive_int(value: object, setting: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{setting} must be an integer, got {value!r}") from exc
    if number <= 0:
        raise ConfigurationError(f"{setting} must be positive, got {number}")
    return number


def load_config(config_path: Path | None = None) -> JetJotConfig:
    """Load configuration from environment variables and optional jetjot.toml.

    Priority: environment variables > jetjot.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    else:
        # Search current dir and ~/.jetjot/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, _APP_DIR / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text(encoding="utf-8"))
                break

    recents_data = file_data.get("recents", {})

    config = JetJotConfig(
        recents_file=Path(
            os.getenv("JETJOT_RECENTS_FILE", recents_data.get("file", str(_DEFAULT_RECENTS_FILE)))
        ).expanduser(),
        max_recents=_positive_int(
            os.getenv("JETJOT_MAX_RECENTS", recents_data.get("max_entries", DEFAULT_MAX_RECENTS)),
            "max_recents",
        ),
        projects_dir=Path(
            os.getenv("JETJOT_PROJECTS_DIR", file_data.get("projects_dir", str(_DEFAULT_PROJECTS_DIR)))
        ).expanduser(),
        log_level=os.getenv("JETJOT_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
