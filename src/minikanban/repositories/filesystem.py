"""Filesystem-based repository for board state."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..models import BoardState, ImportPayload, validate_payload

logger = logging.getLogger(__name__)


class FilesystemRepository:
    """
    Repository keeping the board in a single JSON file.

    The file holds the versioned payload ``{version, tasks, order, audit,
    settings}``, the same shape used for exports.
    """

    STATE_FILE = "mini_kanban_v1.json"

    def __init__(self, data_dir: Path) -> None:
        """
        Initialize repository.

        Args:
            data_dir: Directory holding the state file (e.g., ~/.minikanban)
        """
        self.data_dir = data_dir

    @property
    def state_path(self) -> Path:
        """Path of the state file."""
        return self.data_dir / self.STATE_FILE

    def ensure_directory(self) -> None:
        """Create the data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> BoardState:
        """Load the board, falling back to an empty one on any problem."""
        path = self.state_path
        if not path.exists():
            logger.debug("No %s found, starting empty", self.STATE_FILE)
            return BoardState.default()

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Cannot read %s, starting empty: %s", path, e)
            return BoardState.default()

        parsed = validate_payload(raw)
        if isinstance(parsed, list):
            logger.warning(
                "Stored board is invalid (%d error(s)), starting empty: %s",
                len(parsed),
                "; ".join(parsed[:3]),
            )
            return BoardState.default()

        state = parsed.to_state()
        cleaned = state.without_orphans()
        if cleaned.order != state.order:
            logger.info("Dropped orphaned ids from stored column order")
        return cleaned

    def save(self, state: BoardState) -> bool:
        """Write the board as a versioned payload."""
        payload = ImportPayload.from_state(state)
        try:
            self.ensure_directory()
            self.state_path.write_text(
                json.dumps(payload.to_dict(), ensure_ascii=False),
                encoding="utf-8",
            )
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to save board to %s: %s", self.state_path, e)
            return False
        return True

    def validate(self) -> tuple[bool, str | None]:
        """Check that the data directory is usable.

        Returns:
            (True, None) if the directory exists or can be created,
            otherwise (False, message).
        """
        try:
            self.ensure_directory()
            return (True, None)
        except OSError as e:
            return (False, f"Cannot access data directory: {e}")
