# src/todo_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it takes settings and wires the
concrete JSON TaskStore and the validation rules into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskRepo
from ..core.state import AppState
from ..tasks.task_api import ValidationRules
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, repo: TaskRepo | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the repo) injectable lets tests run without touching
    real config or the working directory. If settings is None, falls back to
    get_settings().
    """
    if settings is None:
        settings = get_settings()

    if repo is None:
        repo = TaskStore(settings.tasks_path)

    rules = ValidationRules.from_settings(settings)
    logger.debug(
        "State ready tasks_path=%s max_length=%s unique=%s",
        getattr(settings, "tasks_path", None),
        rules.max_length,
        rules.enforce_uniqueness,
    )
    return AppState(settings=settings, repo=repo, rules=rules)
