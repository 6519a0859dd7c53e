# src/todo_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_api import ValidationRules
from ..tasks.task_models import TodoList
from .ports import TaskRepo


@dataclass
class AppState:
    """Everything one CLI invocation works with. Lives for a single command."""

    settings: object
    repo: TaskRepo
    rules: ValidationRules

    # Loaded on first use within a command; the registry resets it per command.
    todo: TodoList | None = None

    def require_todo(self) -> TodoList:
        if self.todo is None:
            self.todo = self.repo.load()
        return self.todo
