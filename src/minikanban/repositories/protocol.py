"""Repository protocol for board state storage backends."""

from typing import Protocol

from ..models import BoardState


class StateRepositoryProtocol(Protocol):
    """Interface for board state persistence.

    Implementations never raise for expected storage problems: a missing
    or corrupt store loads as an empty board, and a failed write is
    reported through the return value so the caller can keep working
    in memory.
    """

    def load(self) -> BoardState:
        """Load the persisted board.

        Returns:
            The stored board with orphaned order ids removed, or an empty
            board when nothing usable is stored.
        """
        ...

    def save(self, state: BoardState) -> bool:
        """Persist the board.

        Args:
            state: The board to store.

        Returns:
            True if the state was written.
        """
        ...
