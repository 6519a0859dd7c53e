# src/todo_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class TaskStatus(StrEnum):
    """
    Task status as seen by filters and the CLI.

    Storage keeps a plain boolean `done` flag; these labels are derived from it.
    """

    TODO = "todo"
    DONE = "done"

    @classmethod
    def from_done(cls, done: bool) -> TaskStatus:
        return cls.DONE if done else cls.TODO


@dataclass(slots=True)
class Task:
    id: int
    content: str
    done: bool
    created_at: str

    updated_at: str | None = None
    completed_at: str | None = None

    @property
    def status(self) -> TaskStatus:
        return TaskStatus.from_done(self.done)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "content": self.content,
            "done": self.done,
            "created_at": self.created_at,
        }
        # Optional keys are left out entirely rather than written as null/"".
        if self.updated_at:
            out["updated_at"] = self.updated_at
        if self.completed_at:
            out["completed_at"] = self.completed_at
        return out

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        """
        Build a Task from its JSON object.

        Raises ValueError/TypeError on a malformed entry; the store turns those
        into PersistenceError.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"task entry must be an object, got {type(raw).__name__}")

        tid = raw.get("id")
        # bool is an int subclass; "id": true is not a valid id.
        if not isinstance(tid, int) or isinstance(tid, bool) or tid < 1:
            raise ValueError(f"task id must be a positive integer, got {tid!r}")

        content = raw.get("content")
        if not isinstance(content, str):
            raise TypeError(f"task {tid}: content must be a string")
        if not content.strip():
            raise ValueError(f"task {tid}: content must not be blank")

        done = raw.get("done", False)
        if not isinstance(done, bool):
            raise TypeError(f"task {tid}: done must be a boolean")

        created_at = raw.get("created_at")
        if not isinstance(created_at, str):
            raise TypeError(f"task {tid}: created_at must be a string")

        updated_at = raw.get("updated_at")
        completed_at = raw.get("completed_at")
        for name, val in (("updated_at", updated_at), ("completed_at", completed_at)):
            if val is not None and not isinstance(val, str):
                raise TypeError(f"task {tid}: {name} must be a string")

        return cls(
            id=tid,
            content=content,
            done=done,
            created_at=created_at,
            updated_at=updated_at or None,
            completed_at=completed_at or None,
        )


@dataclass(slots=True)
class TodoList:
    """The whole persisted state: tasks in insertion order plus the id counter."""

    tasks: list[Task] = field(default_factory=list)
    next_id: int = 1
    # Loaded from `"tasks": null` (what the Go tool writes for a never-filled
    # list); kept until a task is added or the list is cleared.
    tasks_null: bool = field(default=False, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        tasks: list[dict[str, Any]] | None = [t.to_dict() for t in self.tasks]
        if not tasks and self.tasks_null:
            tasks = None
        return {
            "tasks": tasks,
            "next_id": self.next_id,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> TodoList:
        """
        Build the list from the decoded JSON document.

        Structural problems (wrong types, bad or duplicate ids, blank content) are
        rejected. Content uniqueness is not checked here: it is a configurable
        rule enforced when text is written, and a file saved with it turned off
        may legitimately hold duplicates.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"top-level JSON must be an object, got {type(raw).__name__}")

        raw_tasks = raw.get("tasks")
        tasks_null = raw_tasks is None
        if tasks_null:
            raw_tasks = []
        if not isinstance(raw_tasks, list):
            raise TypeError("'tasks' must be a list")

        next_id = raw.get("next_id")
        if not isinstance(next_id, int) or isinstance(next_id, bool) or next_id < 1:
            raise ValueError(f"'next_id' must be a positive integer, got {next_id!r}")

        tasks = [Task.from_dict(t) for t in raw_tasks]

        seen: set[int] = set()
        for t in tasks:
            if t.id in seen:
                raise ValueError(f"duplicate task id {t.id}")
            seen.add(t.id)

        return cls(tasks=tasks, next_id=next_id, tasks_null=tasks_null)
