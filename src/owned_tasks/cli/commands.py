# src/owned_tasks/cli/commands.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core.state import AppState
from ..tasks.task_models import Task, TaskDraft

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str]], str]
EmittingHandler = Callable[[AppState, list[str], CommandEmitter | None], str]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Command:
    name: str
    help_text: str
    handler: EmittingHandler
    aliases: list[str] = field(default_factory=list)


class CommandRegistry:
    """
    Slash-command table for the console.

    Most task commands only need (state, args); the few that report progress
    while they run are registered with ``register_emitting`` and also get the
    console's emit callback.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._by_name: dict[str, Command] = {}

    def _add(self, command: Command) -> None:
        self._commands[command.name] = command
        for key in (command.name, *command.aliases):
            self._by_name[key.lower()] = command

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        def _run(state: AppState, args: list[str], emit: CommandEmitter | None) -> str:
            return handler(state, args)

        self._add(Command(name.lower(), help_text, _run, aliases or []))

    def register_emitting(
        self,
        name: str,
        handler: EmittingHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        self._add(Command(name.lower(), help_text, handler, aliases or []))

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """Run "/command args". None if the line is not a command."""
        if not line.startswith("/"):
            return None

        name, *args = line[1:].split() or [""]
        if not name:
            return "Empty command. Use /help to list available commands."

        command = self._by_name.get(name.lower())
        if command is None:
            return f"Unknown command: /{name.lower()}. Use /help to list available commands."
        return command.handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for command in self._commands.values():
            alias_str = f" (also /{', /'.join(command.aliases)})" if command.aliases else ""
            lines.append(f"  /{command.name} - {command.help_text}{alias_str}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(task: Task) -> str:
    mark = "x" if task.done else " "
    return f"#{task.id} [{mark}] {task.title}"


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        task_id = int(args[0].lstrip("#"))
    except ValueError:
        return None
    return task_id if task_id > 0 else None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    title = " ".join(args).strip()
    if not title:
        return "Usage: /add <title>"
    task_id = state.task_store.create(title)
    return f"Created task #{task_id}."


def cmd_show(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /show <id>"
    view = state.task_store.get(task_id)
    if view is None:
        return f"Task #{task_id} not found."
    with view:
        return format_task(view.snapshot())


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks()
    if args and args[0].lower() in ("open", "todo"):
        tasks = [t for t in tasks if not t.done]
    elif args and args[0].lower() == "done":
        tasks = [t for t in tasks if t.done]
    if not tasks:
        return "No tasks."
    return "\n".join(format_task(t) for t in tasks)


def _set_done(state: AppState, args: list[str], done: bool, usage: str) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return usage
    if not state.task_store.mark_done(task_id, done):
        return f"Task #{task_id} not found."
    return f"Task #{task_id} marked {'done' if done else 'not done'}."


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, True, "Usage: /done <id>")


def cmd_undone(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, False, "Usage: /undone <id>")


def cmd_rename(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    title = " ".join(args[1:]).strip()
    if task_id is None or not title:
        return "Usage: /rename <id> <title>"

    def _rename(draft: TaskDraft) -> None:
        draft.title = title

    if not state.task_store.update(task_id, _rename):
        return f"Task #{task_id} not found."
    return f"Task #{task_id} renamed."


def cmd_rm(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    removed = state.task_store.take(task_id)
    if removed is None:
        return f"Task #{task_id} not found."
    return f"Deleted {format_task(removed)}"


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("Releasing all tasks...")
    released = state.task_store.clear()
    logger.debug("clear requested released=%d", released)
    return f"Released {released} task(s)."


def cmd_count(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks()
    done = sum(1 for t in tasks if t.done)
    return f"Tasks: {len(tasks)} total, {done} done, {len(tasks) - done} open."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Create a task: /add <title>.", aliases=["new"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.", aliases=["get"])
registry.register("list", cmd_list, help_text="List tasks: /list [open|done].", aliases=["ls"])
registry.register("done", cmd_done, help_text="Mark a task done: /done <id>.")
registry.register("undone", cmd_undone, help_text="Mark a task not done: /undone <id>.")
registry.register("rename", cmd_rename, help_text="Change a title: /rename <id> <title>.")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["del", "delete"])
registry.register_emitting("clear", cmd_clear, help_text="Delete all tasks.")
registry.register("count", cmd_count, help_text="Show task totals.", aliases=["stat"])
