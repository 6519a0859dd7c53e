# src/todo_tracker/tasks/task_api.py

"""
Task operations on an already loaded TodoList.

Nothing here touches the disk: callers load the list, run one operation and
save it back only if the operation returned normally. A raised error means the
list was not modified.

Ids are always matched by value. Positions shift after a delete, ids never do.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from .task_errors import InvalidArgumentError, NotFoundError, ValidationError, ValidationReason
from .task_models import Task, TaskStatus, TodoList

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_LENGTH = 200


@dataclass(frozen=True, slots=True)
class ValidationRules:
    """Content rules. max_length=None disables the cap."""

    max_length: int | None = DEFAULT_MAX_LENGTH
    enforce_uniqueness: bool = True

    @classmethod
    def from_settings(cls, settings) -> ValidationRules:
        max_length = getattr(settings, "max_length", DEFAULT_MAX_LENGTH)
        if max_length is not None and int(max_length) <= 0:
            max_length = None
        return cls(
            max_length=None if max_length is None else int(max_length),
            enforce_uniqueness=bool(getattr(settings, "enforce_uniqueness", True)),
        )


def _ts_local() -> str:
    return datetime.now().astimezone().strftime(TIMESTAMP_FORMAT)


def _stamp(task: Task, now: str) -> str:
    # Same fixed-width format on both sides, so string order is time order.
    return now if now >= task.created_at else task.created_at


def _validate_content(
    todo: TodoList,
    content: str,
    rules: ValidationRules,
    *,
    exclude_id: int | None = None,
) -> str:
    text = content.strip()

    if rules.max_length is not None and len(text) > rules.max_length:
        raise ValidationError(ValidationReason.TOO_LONG, limit=rules.max_length)

    if not text:
        raise ValidationError(ValidationReason.EMPTY)

    if rules.enforce_uniqueness:
        folded = text.casefold()
        for t in todo.tasks:
            if t.id != exclude_id and t.content.casefold() == folded:
                raise ValidationError(ValidationReason.DUPLICATE)

    return text


def _next_task_id(todo: TodoList) -> int:
    # A hand-edited file may carry a stale counter; never hand out a used id.
    highest = max((t.id for t in todo.tasks), default=0)
    return max(todo.next_id, highest + 1)


def add_task(
    todo: TodoList,
    content: str,
    *,
    rules: ValidationRules | None = None,
    now: str | None = None,
) -> int:
    """Validate, append a new not-done task and return its id."""
    text = _validate_content(todo, content, rules or ValidationRules())

    if now is None:
        now = _ts_local()

    task_id = _next_task_id(todo)
    todo.tasks.append(
        Task(
            id=task_id,
            content=text,
            done=False,
            created_at=now,
            updated_at=now,
        )
    )
    todo.tasks_null = False
    todo.next_id = task_id + 1
    logger.debug("Task added id=%s next_id=%s", task_id, todo.next_id)
    return task_id


def find_task(todo: TodoList, task_id: int) -> Task:
    for t in todo.tasks:
        if t.id == task_id:
            return t
    raise NotFoundError(task_id)


def update_task(
    todo: TodoList,
    task_id: int,
    content: str,
    *,
    rules: ValidationRules | None = None,
    now: str | None = None,
) -> Task:
    """
    Replace the task's text.

    The new text goes through the same rules as add; the duplicate check
    ignores the task being edited, so changing only the letter case is allowed.
    """
    task = find_task(todo, task_id)
    text = _validate_content(todo, content, rules or ValidationRules(), exclude_id=task.id)

    task.content = text
    task.updated_at = _stamp(task, now or _ts_local())
    logger.debug("Task updated id=%s", task_id)
    return task


def _set_done(task: Task, done: bool, now: str) -> None:
    stamp = _stamp(task, now)
    if done and not task.done:
        task.completed_at = stamp
    elif not done:
        task.completed_at = None
    task.done = done
    task.updated_at = stamp


def toggle_task(todo: TodoList, task_id: int, *, now: str | None = None) -> Task:
    task = find_task(todo, task_id)
    _set_done(task, not task.done, now or _ts_local())
    logger.debug("Task toggled id=%s done=%s", task_id, task.done)
    return task


def mark_task(
    todo: TodoList,
    task_id: int,
    status: TaskStatus,
    *,
    now: str | None = None,
) -> Task:
    """
    Set an explicit status.

    Marking a task with the status it already has changes nothing except
    updated_at; in particular an already done task keeps its completed_at.
    Raises InvalidArgumentError for a status that is not a TaskStatus value.
    """
    try:
        target = TaskStatus(status)
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown status: {status!r} (expected one of: {', '.join(TaskStatus)})"
        ) from None

    task = find_task(todo, task_id)
    _set_done(task, target is TaskStatus.DONE, now or _ts_local())
    logger.debug("Task marked id=%s status=%s", task_id, task.status.value)
    return task


def delete_task(todo: TodoList, task_id: int) -> Task:
    for i, t in enumerate(todo.tasks):
        if t.id == task_id:
            del todo.tasks[i]
            logger.debug("Task deleted id=%s", task_id)
            return t
    raise NotFoundError(task_id)


def clear_all(todo: TodoList) -> int:
    """Remove every task and restart numbering at 1. Returns how many were removed."""
    removed = len(todo.tasks)
    todo.tasks.clear()
    todo.tasks_null = False
    todo.next_id = 1
    logger.debug("All tasks cleared removed=%s", removed)
    return removed


def complete_all(todo: TodoList, *, now: str | None = None) -> int:
    """
    Mark every open task done.

    All tasks completed by one call share the same completed_at.
    Returns how many tasks changed.
    """
    if now is None:
        now = _ts_local()

    changed = 0
    for t in todo.tasks:
        if not t.done:
            _set_done(t, True, now)
            changed += 1

    logger.debug("Completed all tasks changed=%s", changed)
    return changed


def list_tasks(todo: TodoList, status_filter: str | None = None) -> list[Task]:
    """
    Tasks in storage order, optionally only those whose status equals the filter.

    Filter values are TaskStatus labels ("todo", "done"). Any other value
    matches nothing and yields an empty list rather than an error.
    """
    if status_filter is None:
        return list(todo.tasks)
    return [t for t in todo.tasks if t.status.value == status_filter]
