"""Configuration schema for searchbar."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings


class HistoryConfig(BaseModel):
    """Search/replace term history settings."""

    depth: int = Field(default=10, ge=1)
    options_path: str = "~/.searchbar/options.json"


class Config(BaseSettings):
    """Root configuration for searchbar."""

    history: HistoryConfig = Field(default_factory=HistoryConfig)
    log_level: str = "WARNING"

    @property
    def options_file(self) -> Path:
        """Get expanded path of the persisted search options."""
        return Path(self.history.options_path).expanduser()

    model_config = ConfigDict(
        env_prefix="SEARCHBAR_",
        env_nested_delimiter="__",
        extra="ignore",
    )
