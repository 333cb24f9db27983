"""Board state engine: commands, reducer and the store handle."""

from .commands import (
    Command,
    CreateTask,
    DeleteTask,
    ImportState,
    Init,
    IntegrityAutofix,
    MoveTask,
    SetMode,
    TaskPatch,
    UpdateTask,
)
from .reducer import reduce
from .seed import build_demo_state
from .store import BoardStore, StoreNotReadyError

__all__ = [
    "BoardStore",
    "Command",
    "CreateTask",
    "DeleteTask",
    "ImportState",
    "Init",
    "IntegrityAutofix",
    "MoveTask",
    "SetMode",
    "StoreNotReadyError",
    "TaskPatch",
    "UpdateTask",
    "build_demo_state",
    "reduce",
]
