# src/todo_tracker/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_errors import InvalidArgumentError
from ..tasks.task_models import Task, TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class UnknownCommandError(InvalidArgumentError):
    """First argument does not name a registered command."""


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    handler: CommandHandler
    help_text: str
    # Mutating commands save state.todo after the handler returns normally.
    mutating: bool = False
    aliases: tuple[str, ...] = field(default_factory=tuple)


class CommandRegistry:
    """
    Command registry used by the CLI entry point (todo add ..., todo list, ...).

    One handle() call is one full cycle: load -> handler -> save (mutating
    commands only). Handlers parse their arguments before calling
    state.require_todo(), so bad arguments never reach the store. A handler
    that raises leaves the file untouched.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._by_name: dict[str, Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        mutating: bool = False,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        cmd = Command(
            name=name.lower(),
            handler=handler,
            help_text=help_text,
            mutating=mutating,
            aliases=tuple(a.lower() for a in aliases),
        )
        self._by_name[cmd.name] = cmd
        self._commands[cmd.name] = cmd
        for alias in cmd.aliases:
            self._commands[alias] = cmd

    def get(self, name: str) -> Command | None:
        # "--add" and "-list" are accepted as "add" and "list".
        return self._commands.get(name.lstrip("-").lower())

    def handle(self, state: AppState, argv: list[str]) -> str:
        """
        Run the command named by argv[0] with the remaining args.

        Returns the reply text. Raises TodoError subclasses on failure.
        """
        if not argv:
            return self.build_help()

        head, args = argv[0], argv[1:]
        # Flag style with an inline value: "-add=milk", "--delete=3".
        if head.startswith("-") and "=" in head:
            head, value = head.split("=", 1)
            args = [value, *args]

        cmd = self.get(head)
        if cmd is None:
            raise UnknownCommandError(
                f"Unknown command: {head}. Use 'help' to list available commands."
            )

        # Every command starts from what is on disk right now.
        state.todo = None

        logger.debug("Running command %s args=%s", cmd.name, args)
        reply = cmd.handler(state, args)

        if cmd.mutating and state.todo is not None:
            state.repo.save(state.todo)

        return reply

    def build_help(self) -> str:
        lines = ["Usage: todo <command> [args]", "", "Available commands:"]
        for name, cmd in self._by_name.items():
            alias_str = f" (aliases: {', '.join(cmd.aliases)})" if cmd.aliases else ""
            lines.append(f"  {name} - {cmd.help_text}{alias_str}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_task_id(args: list[str], usage: str) -> int:
    if not args:
        raise InvalidArgumentError(f"Missing task id. Usage: {usage}")
    raw = args[0]
    try:
        task_id = int(raw)
    except ValueError:
        raise InvalidArgumentError(f"Invalid task id: {raw!r}") from None
    if task_id < 1:
        raise InvalidArgumentError(f"Invalid task id: {raw!r}")
    return task_id


def _join_text(args: list[str], usage: str) -> str:
    if not args:
        raise InvalidArgumentError(f"Missing task text. Usage: {usage}")
    return " ".join(args)


def format_task(task: Task) -> str:
    mark = "x" if task.done else "_"
    line = f"{task.id} [{mark}] {task.content} (created: {task.created_at}"
    if task.done and task.completed_at:
        line += f", completed: {task.completed_at}"
    return line + ")"


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    list        -> every task
    list todo   -> open tasks only
    list done   -> completed tasks only
    """
    status_filter = args[0].lower() if args else None
    tasks = task_api.list_tasks(state.require_todo(), status_filter)

    if not tasks:
        if status_filter is None:
            return "Task list is empty"
        return f"No tasks match '{status_filter}'"

    return "\n".join(["Tasks:", *(format_task(t) for t in tasks)])


def cmd_add(state: AppState, args: list[str]) -> str:
    text = _join_text(args, "todo add <text>")
    todo = state.require_todo()
    task_id = task_api.add_task(todo, text, rules=state.rules)
    task = task_api.find_task(todo, task_id)
    return f"Added task {task_id}: {task.content}"


def cmd_update(state: AppState, args: list[str]) -> str:
    usage = "todo update <id> <text>"
    task_id = _parse_task_id(args, usage)
    text = _join_text(args[1:], usage)
    task = task_api.update_task(state.require_todo(), task_id, text, rules=state.rules)
    return f"Task #{task.id} updated: {task.content}"


def _status_word(task: Task) -> str:
    return "done" if task.done else "not done"


def cmd_toggle(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args, "todo toggle <id>")
    task = task_api.toggle_task(state.require_todo(), task_id)
    return f"Task #{task.id} marked as {_status_word(task)}"


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args, "todo done <id>")
    task = task_api.mark_task(state.require_todo(), task_id, TaskStatus.DONE)
    return f"Task #{task.id} marked as {_status_word(task)}"


def cmd_undo(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args, "todo undo <id>")
    task = task_api.mark_task(state.require_todo(), task_id, TaskStatus.TODO)
    return f"Task #{task.id} marked as {_status_word(task)}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args, "todo delete <id>")
    task_api.delete_task(state.require_todo(), task_id)
    return f"Task #{task_id} was deleted"


def cmd_clear(state: AppState, args: list[str]) -> str:
    removed = task_api.clear_all(state.require_todo())
    return f"All tasks cleared ({removed} removed)"


def cmd_complete_all(state: AppState, args: list[str]) -> str:
    changed = task_api.complete_all(state.require_todo())
    return f"All tasks marked as done ({changed} changed)"


registry.register("help", cmd_help, "Show available commands.", aliases=["h"])
registry.register("list", cmd_list, "List tasks: list [todo|done].", aliases=["ls"])
registry.register("add", cmd_add, "Add a task: add <text>.", mutating=True)
registry.register(
    "update", cmd_update, "Change a task's text: update <id> <text>.", mutating=True, aliases=["edit"]
)
registry.register("toggle", cmd_toggle, "Flip done/not done: toggle <id>.", mutating=True)
registry.register("done", cmd_done, "Mark a task done: done <id>.", mutating=True)
registry.register("undo", cmd_undo, "Mark a task not done: undo <id>.", mutating=True)
registry.register("delete", cmd_delete, "Delete a task: delete <id>.", mutating=True, aliases=["rm"])
registry.register("clear", cmd_clear, "Delete all tasks and restart numbering.", mutating=True)
registry.register("complete-all", cmd_complete_all, "Mark every task done.", mutating=True)
