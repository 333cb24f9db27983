"""Root-owned board handle.

A ``BoardStore`` is created once by the application and handed to every
consumer explicitly. It holds the current ``BoardState``, applies commands
through the reducer, persists after each change and notifies subscribers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..models import BoardState
from ..repositories import StateRepositoryProtocol
from .commands import Init
from .reducer import reduce
from .seed import build_demo_state

logger = logging.getLogger(__name__)

Listener = Callable[[BoardState], None]


class StoreNotReadyError(RuntimeError):
    """Raised when the store is used before ``open()``."""


class BoardStore:
    """Mutable cell around the immutable board state."""

    def __init__(
        self,
        repository: StateRepositoryProtocol | None = None,
        seed_demo: bool = True,
    ) -> None:
        self.repository = repository
        self._seed_demo = seed_demo
        self._state: BoardState | None = None
        self._listeners: list[Listener] = []

    @property
    def is_open(self) -> bool:
        """Whether the store holds a state."""
        return self._state is not None

    def open(self) -> BoardState:
        """Load the persisted board (or the demo seed) and make it current."""
        loaded = self.repository.load() if self.repository else BoardState.default()
        if self._seed_demo and loaded.is_empty:
            logger.info("Board is empty, loading demo tasks")
            loaded = build_demo_state()
        return self.dispatch(Init(loaded))

    def get_state(self) -> BoardState:
        """Current state."""
        if self._state is None:
            raise StoreNotReadyError("BoardStore used before open()")
        return self._state

    def dispatch(self, command: object) -> BoardState:
        """Apply a command, persist and notify when the state changed."""
        if self._state is None:
            if not isinstance(command, Init):
                raise StoreNotReadyError("BoardStore used before open()")
            current = BoardState.default()
        else:
            current = self._state

        next_state = reduce(current, command)
        if next_state is self._state:
            return next_state

        self._state = next_state
        self._persist(next_state)
        for listener in list(self._listeners):
            listener(next_state)
        return next_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _persist(self, state: BoardState) -> None:
        if self.repository is None:
            return
        if not self.repository.save(state):
            logger.warning("Board state not persisted, continuing in memory")
