# src/pocket_todo/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable

from ..cli.commands import CommandRegistry, submit_new_task
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..tasks.task_store import StoreEvent
from ..ui.render import render_task_list
from ..ui.theme import Styler

logger = logging.getLogger(__name__)

LineReader = Callable[[str], Awaitable[str]]
LineWriter = Callable[[str], None]

PROMPT = ">>> "
YES = frozenset({"y", "yes"})


async def read_line(prompt: str) -> str:
    """
    input() in a daemon thread, awaited from the loop.

    A daemon thread (instead of asyncio.to_thread) lets the process exit on Ctrl+C
    while input() is still blocked. EOFError / KeyboardInterrupt are re-raised here.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def _deliver(value: str | None, exc: BaseException | None) -> None:
        if fut.done():
            return
        if exc is not None:
            fut.set_exception(exc)
        else:
            fut.set_result(value or "")

    def _reader() -> None:
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt) as e:
            loop.call_soon_threadsafe(_deliver, None, e)
        else:
            loop.call_soon_threadsafe(_deliver, line, None)

    threading.Thread(target=_reader, name="console-input", daemon=True).start()
    return await fut


async def run_console_loop(
    state: AppState,
    *,
    reader: LineReader = read_line,
    writer: LineWriter = print,
    commands: CommandRegistry | None = None,
) -> None:
    """
    Interactive REPL over the task store.

    - plain input adds a task
    - /commands go through the registry (/help lists them)
    - the list is re-rendered after every store change
    """
    commands = commands or command_registry
    app_name = str(getattr(state.settings, "app_name", "pocket-todo"))
    dirty = False

    def _on_change(event: StoreEvent) -> None:
        nonlocal dirty
        dirty = True

    async def _confirm(question: str) -> bool:
        try:
            answer = await reader(f"{question} [y/N] ")
        except (EOFError, KeyboardInterrupt):
            return False
        return answer.strip().lower() in YES

    def _render() -> None:
        writer(render_task_list(state.store.tasks, Styler(state.theme), title=app_name))

    unsubscribe = state.store.subscribe(_on_change)
    logger.info("Console connector started (tasks=%s).", len(state.store))

    try:
        writer("Type a task to add it. Use /help for commands. Use /exit to quit.\n")
        _render()

        while state.running:
            try:
                raw = await reader(PROMPT)
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                writer("")
                break

            if not raw:
                continue

            line = raw.strip()
            if not line:
                # Whitespace-only submit: let the store reject it and say why.
                writer(submit_new_task(state, raw))
                continue

            if line.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            theme_before = state.theme
            try:
                reply = await commands.handle(state, line, confirm=_confirm)
                if reply is None:
                    reply = submit_new_task(state, line)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            writer(reply)

            # /list already printed it; a theme switch re-renders in the new palette.
            if line.split()[0].lower() in ("/list", "/ls"):
                dirty = False
            elif dirty or state.theme is not theme_before:
                dirty = False
                _render()
    finally:
        unsubscribe()
        logger.info("Console connector finished.")
