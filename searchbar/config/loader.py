"""Load and save the searchbar configuration file."""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from searchbar.config.schema import Config


def get_config_path() -> Path:
    """Return default path of the configuration file."""
    return Path.home() / ".searchbar" / "config.json"


def load_config(path: Path | None = None) -> Config:
    """Load configuration from disk, falling back to defaults."""
    target = path or get_config_path()
    if not target.exists():
        return Config()

    try:
        payload = json.loads(target.read_text(encoding="utf-8"))
        return Config(**payload)
    except (OSError, TypeError, ValueError, ValidationError) as exc:
        logger.warning(f"[config] failed to load {target}: {exc}")
        return Config()


def save_config(config: Config, path: Path | None = None) -> None:
    """Persist configuration to disk."""
    target = path or get_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(config.model_dump(), indent=2), encoding="utf-8")
