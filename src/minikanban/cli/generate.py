"""Generate command for creating default config."""

import logging
from pathlib import Path

import yaml

from ..models.board_config import MinikanbanConfig
from ..services.config_service import ConfigService
from .output import error, info, line, success

logger = logging.getLogger(__name__)

CONFIG_HEADER = """\
# minikanban Board Configuration
#
# board.columns: display titles for the three fixed statuses.
#   Reorder the entries to change the column order. Every status
#   (todo, doing, done) must appear exactly once.
#
# board.seed_demo: load three demo tasks when the stored board is empty.
#
# board.placeholder_title: title written by the integrity autofix when a
#   task title is shorter than 3 characters.

"""


def generate_config_yaml() -> str:
    """YAML for the default config, with a comment header.

    MinikanbanConfig.default() is the single source of truth, so the
    generated file always matches the built-in defaults.
    """
    config_dict = MinikanbanConfig.default().model_dump()
    return CONFIG_HEADER + yaml.dump(
        config_dict, default_flow_style=False, sort_keys=False, allow_unicode=True
    )


def run_generate(data_dir: Path) -> int:
    """
    Generate default configuration.

    Args:
        data_dir: Directory where minikanban.yml will be created

    Returns:
        Exit code (0 = success, 1 = nothing to do or failure)
    """
    config_path = data_dir / ConfigService.CONFIG_FILE

    if config_path.exists():
        info(f"Config exists: {config_path}")
        line("Nothing to generate.")
        return 1

    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_yaml(), encoding="utf-8")
    except OSError as e:
        logger.warning("Could not write %s: %s", config_path, e)
        error(f"Could not write config: {config_path}")
        return 1

    success(f"Generated config: {config_path}")
    return 0
