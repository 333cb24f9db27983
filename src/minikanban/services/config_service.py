"""Configuration service for loading minikanban.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models.board_config import BoardConfig, MinikanbanConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and caching board configuration."""

    CONFIG_FILE = "minikanban.yml"

    def __init__(self, data_dir: Path) -> None:
        """Initialize the config service.

        Args:
            data_dir: Directory that may contain minikanban.yml
        """
        self.data_dir = data_dir
        self._config: MinikanbanConfig | None = None
        self._config_error: str | None = None

    @property
    def config_path(self) -> Path:
        """Path of the config file."""
        return self.data_dir / self.CONFIG_FILE

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def get_config(self) -> MinikanbanConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def get_board_config(self) -> BoardConfig:
        """Convenience method to get board configuration."""
        return self.get_config().board

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def _load_config(self) -> MinikanbanConfig:
        """Load configuration from file or return default."""
        self._config_error = None

        if not self.config_path.exists():
            logger.debug("No %s found, using defaults", self.CONFIG_FILE)
            return MinikanbanConfig.default()

        try:
            with self.config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            return self._fallback(f"Invalid YAML in {self.CONFIG_FILE}: {e}")

        if data is None:
            return self._fallback(f"{self.CONFIG_FILE} is empty")

        if not isinstance(data, dict):
            return self._fallback(f"{self.CONFIG_FILE} must contain a mapping")

        try:
            config = MinikanbanConfig.model_validate(data)
        except ValidationError as e:
            return self._fallback(f"Invalid {self.CONFIG_FILE}: {e.error_count()} error(s)")

        logger.info("Loaded %s", self.CONFIG_FILE)
        return config

    def _fallback(self, message: str) -> MinikanbanConfig:
        self._config_error = message
        logger.warning(message)
        return MinikanbanConfig.default()
