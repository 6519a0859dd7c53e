# src/todo_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command layer.

Commands depend on this Protocol instead of the concrete JSON file store,
which keeps storage swappable and lets tests run against an in-memory fake.
"""

from typing import Protocol

from ..tasks.task_models import TodoList


class TaskRepo(Protocol):
    """Whole-list persistence boundary: one load and at most one save per command."""

    def load(self) -> TodoList: ...

    def save(self, todo: TodoList) -> None: ...
