# src/todo_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from .task_errors import PersistenceError
from .task_models import TodoList

logger = logging.getLogger(__name__)

DEFAULT_TASKS_PATH = "tasks.json"


# Characters that only ever occur inside JSON strings, escaped the way
# Go's encoding/json writes them.
_GO_ESCAPES = {
    "&": "\\u0026",
    "<": "\\u003c",
    ">": "\\u003e",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_GO_ESCAPE_TABLE = str.maketrans(_GO_ESCAPES)


def dumps_todo_list(todo: TodoList) -> str:
    """
    Serialise the whole list as 2-space indented JSON.

    Output matches the files the original Go tool writes (json.MarshalIndent):
    no trailing newline, HTML-sensitive characters escaped, other non-ASCII
    written as-is. A file it wrote is saved back unchanged when nothing changed.
    """
    text = json.dumps(todo.to_dict(), ensure_ascii=False, indent=2)
    return text.translate(_GO_ESCAPE_TABLE)


def loads_todo_list(text: str) -> TodoList:
    """
    Parse a serialised list.

    Raises ValueError/TypeError (json.JSONDecodeError is a ValueError) when the
    text is not the expected structure.
    """
    return TodoList.from_dict(json.loads(text))


class TaskStore:
    """
    JSON file task store.

    The whole list is read on load() and rewritten on save(); there is no
    partial update and no locking. Concurrent writers: last one wins.

    Writes go to a sibling temp file which then replaces the target, so a
    failed write leaves the previous file in place.
    """

    def __init__(self, path: str | Path = DEFAULT_TASKS_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> TodoList:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.debug("No task file at %s; starting empty.", self._path)
            return TodoList()
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(
                f"Failed to read tasks from {self._path}: {e}", path=self._path
            ) from e

        try:
            todo = loads_todo_list(raw)
        except (ValueError, TypeError) as e:
            raise PersistenceError(
                f"Failed to decode tasks from {self._path}: {e}", path=self._path
            ) from e

        logger.info("Loaded %d tasks from %s (next_id=%d)", len(todo.tasks), self._path, todo.next_id)
        return todo

    def save(self, todo: TodoList) -> None:
        try:
            data = dumps_todo_list(todo)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to encode tasks: {e}", path=self._path) from e

        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(data, "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise PersistenceError(
                f"Failed to save tasks to {self._path}: {e}", path=self._path
            ) from e

        logger.info("Saved %d tasks to %s", len(todo.tasks), self._path)
