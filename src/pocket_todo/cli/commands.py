# src/pocket_todo/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import cast

from ..core.ports import ConfirmPrompt
from ..core.state import AppState
from ..tasks.task_models import EmptyTaskError, Task
from ..ui.render import render_task_list
from ..ui.theme import Styler

CommandResult = str | Awaitable[str]
CommandHandler2 = Callable[[AppState, list[str]], CommandResult]
CommandHandler3 = Callable[[AppState, list[str], ConfirmPrompt | None], CommandResult]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /done, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        confirm: ConfirmPrompt | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Handlers may be plain functions or coroutines.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            result = cast(CommandHandler3, handler)(state, args, confirm)
        else:
            result = cast(CommandHandler2, handler)(state, args)

        if inspect.isawaitable(result):
            return await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Anything else you type is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def submit_new_task(state: AppState, text: str) -> str:
    """Plain (non-command) input: add it as a task."""
    try:
        task = state.store.add_task(text)
    except EmptyTaskError as e:
        return str(e)
    return f"Added: {task.text}"


def _task_at(state: AppState, args: list[str], usage: str) -> Task | str:
    """Resolve a 1-based list position to a task, or return an error message."""
    if not args:
        return usage
    try:
        pos = int(args[0])
    except ValueError:
        return f"Not a task number: {args[0]}. {usage}"

    tasks = state.store.tasks
    if pos < 1 or pos > len(tasks):
        return f"No task #{pos}. The list has {len(tasks)} task(s)."
    return tasks[pos - 1]


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    styler = Styler(state.theme)
    title = str(getattr(state.settings, "app_name", "My Tasks"))
    return render_task_list(state.store.tasks, styler, title=title)


def cmd_done(state: AppState, args: list[str]) -> str:
    """
    /done N  -> toggle completion of task N (done <-> not done)
    """
    task = _task_at(state, args, "Usage: /done N")
    if isinstance(task, str):
        return task

    state.store.toggle_task(task.id)
    updated = state.store.get(task.id)
    status = "done" if updated is not None and updated.completed else "not done"
    return f"Marked as {status}: {task.text}"


async def cmd_delete(state: AppState, args: list[str], confirm: ConfirmPrompt | None = None) -> str:
    """
    /del N  -> delete task N after a yes/no confirmation
    """
    task = _task_at(state, args, "Usage: /del N")
    if isinstance(task, str):
        return task

    if state.confirm_delete:
        if confirm is None:
            return "Deletion needs confirmation, but this front end cannot ask for it."
        if not await confirm(f'Delete "{task.text}"?'):
            logger.debug("Delete cancelled id=%s", task.id)
            return "Cancelled."

    if not state.store.delete_task(task.id):
        # Removed while the confirmation was pending.
        return "Task no longer exists."
    return f"Deleted: {task.text}"


def cmd_theme(state: AppState, args: list[str]) -> str:
    """
    /theme        -> toggle light/dark
    /theme dark   -> set explicitly
    """
    if args:
        arg = args[0].lower()
        if arg not in ("light", "dark"):
            return "Usage: /theme [light|dark]"
        if arg != state.theme.value:
            state.toggle_theme()
    else:
        state.toggle_theme()
    return f"Theme: {state.theme.value}"


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    tasks = state.store.tasks
    done = sum(1 for t in tasks if t.completed)
    last = state.store.last_write
    if last is None:
        saved = "nothing written yet"
    elif last.ok:
        saved = f"ok (revision {last.revision})"
    else:
        saved = f"FAILED (revision {last.revision}): {last.error}"
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({done} done)\n"
        f"  Storage: {getattr(settings, 'storage_backend', '?')} at {getattr(settings, 'storage_path', '?')}"
        f" (key={state.store.key})\n"
        f"  Last save: {saved}\n"
        f"  Theme: {state.theme.value}\n"
        f"  Confirm delete: {'ON' if state.confirm_delete else 'OFF'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("done", cmd_done, help_text="Toggle a task done/not done: /done N.", aliases=["t", "toggle"])
registry.register("del", cmd_delete, help_text="Delete a task (asks first): /del N.", aliases=["rm", "delete"])
registry.register("theme", cmd_theme, help_text="Switch theme: /theme [light|dark].")
registry.register("status", cmd_status, help_text="Show storage and theme status.")
