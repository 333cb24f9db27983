"""Application settings, read from ``MINIKANBAN_*`` environment variables."""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_editor() -> str:
    return os.environ.get("EDITOR", "vim")


class Settings(BaseSettings):
    """Runtime settings. CLI flags override the environment."""

    model_config = SettingsConfigDict(env_prefix="MINIKANBAN_")

    # Board state file, exports default and minikanban.yml live here
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".minikanban")

    editor: str = Field(default_factory=_default_editor)

    # 0 quiet, 1 INFO, 2+ DEBUG
    verbose: int = Field(default=0, ge=0)

    log_file: Path | None = None
