# src/todo_tracker/tasks/task_errors.py

"""
Errors raised by the task store and task operations.

Everything derives from TodoError so the CLI can report any of them with a
single except clause. None of them is retried: the command fails and exits.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path


class TodoError(Exception):
    """Base class for user-reportable failures."""


class PersistenceError(TodoError):
    """Backing file could not be read, parsed or written."""

    def __init__(self, message: str, *, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class ValidationReason(StrEnum):
    EMPTY = "empty"
    TOO_LONG = "too_long"
    DUPLICATE = "duplicate"


class ValidationError(TodoError):
    """Proposed task content breaks a content rule."""

    def __init__(self, reason: ValidationReason, *, limit: int | None = None) -> None:
        self.reason = reason
        self.limit = limit
        super().__init__(self._message())

    def _message(self) -> str:
        if self.reason is ValidationReason.TOO_LONG:
            return f"Task text must not exceed {self.limit} characters"
        if self.reason is ValidationReason.EMPTY:
            return "Task text must not be empty"
        return "A task with this text already exists"


class NotFoundError(TodoError):
    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task #{task_id} not found")


class InvalidArgumentError(TodoError):
    """Missing or unparsable command argument (rejected before touching the store)."""
