"""Widget components."""

from .column import EmptyColumnMessage, KanbanColumn
from .command_bar import CommandBar
from .confirm_modal import ConfirmModal
from .integrity_modal import IntegrityModal
from .message_modal import MessageModal
from .path_prompt import PathPromptModal
from .task_card import TaskCard
from .task_preview_modal import TaskPreviewModal

__all__ = [
    "CommandBar",
    "ConfirmModal",
    "EmptyColumnMessage",
    "IntegrityModal",
    "KanbanColumn",
    "MessageModal",
    "PathPromptModal",
    "TaskCard",
    "TaskPreviewModal",
]
