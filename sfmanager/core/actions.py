"""
Typed command and result contract shared by the key router, the app and the executor.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class AppCommand(str, Enum):
    """Abstract commands understood by the application dispatcher."""

    HELP = "help"
    COPY = "copy"
    MOVE = "move"
    DELETE = "delete"
    REFRESH = "refresh"
    QUIT = "quit"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    JUMP_FIRST = "jump_first"
    JUMP_LAST = "jump_last"
    ENTER_DIR = "enter_dir"
    LEAVE_DIR = "leave_dir"
    SWITCH_PANEL = "switch_panel"
    SEARCH_CHAR = "search_char"
    SEARCH_BACKSPACE = "search_backspace"
    CLEAR_SEARCH = "clear_search"
    DISMISS = "dismiss"


class Side(str, Enum):
    """Which of the two panels a command targets."""

    LEFT = "left"
    RIGHT = "right"

    def other(self):
        return Side.RIGHT if self is Side.LEFT else Side.LEFT


class OperationKind(str, Enum):
    """Background filesystem operation kinds."""

    COPY = "copy"
    MOVE = "move"


class OperationStatus(str, Enum):
    """Lifecycle of a submitted operation."""

    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class Command:
    """One dispatched command with its optional argument (search character)."""

    name: AppCommand
    payload: Any = None


@dataclass(frozen=True)
class OperationResult:
    """Plain outcome of a finished operation."""

    status: OperationStatus
    reason: Optional[str] = None

    @property
    def failed(self):
        return self.status == OperationStatus.FAILED

    @classmethod
    def success(cls):
        return cls(OperationStatus.SUCCEEDED)

    @classmethod
    def failure(cls, reason):
        return cls(OperationStatus.FAILED, str(reason) or "Unknown error")
