# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_tracker.core.state import AppState
from todo_tracker.tasks.task_api import ValidationRules

from .fakes import InMemoryTaskRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="todo",
        log_level="WARNING",
        log_dir=None,
        tasks_path=tmp_path / "tasks.json",
        max_length=200,
        enforce_uniqueness=True,
    )


@pytest.fixture()
def repo() -> InMemoryTaskRepo:
    return InMemoryTaskRepo()


@pytest.fixture()
def state(settings: SimpleNamespace, repo: InMemoryTaskRepo) -> AppState:
    return AppState(
        settings=settings,
        repo=repo,
        rules=ValidationRules.from_settings(settings),
    )
