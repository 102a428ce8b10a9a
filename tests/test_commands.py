# tests/test_commands.py

from __future__ import annotations

import pytest

from pocket_todo.cli.commands import CommandRegistry, registry, submit_new_task
from pocket_todo.core.state import AppState
from pocket_todo.ui.theme import Theme


def _confirm_with(answer: bool, asked: list[str] | None = None):
    async def confirm(question: str) -> bool:
        if asked is not None:
            asked.append(question)
        return answer

    return confirm


@pytest.mark.asyncio
async def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    async def h3(state, args, confirm):
        called["h3"] += 1
        return "h3:" + str(await confirm("sure?"))

    reg.register("a", h2, "a", aliases=["aa"])
    reg.register("b", h3, "b")

    assert await reg.handle(state, "/a x y") == "h2:x,y"
    assert await reg.handle(state, "/AA") == "h2:"
    assert await reg.handle(state, "/b", confirm=_confirm_with(True)) == "h3:True"
    assert called == {"h2": 2, "h3": 1}


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_submit_new_task_adds_or_explains(state: AppState) -> None:
    assert submit_new_task(state, "  Buy milk ") == "Added: Buy milk"
    assert submit_new_task(state, "   ") == "Task cannot be empty."
    assert [t.text for t in state.store.tasks] == ["Buy milk"]
    await state.store.flush()


@pytest.mark.asyncio
async def test_done_toggles_by_position(state: AppState) -> None:
    state.store.add_task("a")
    state.store.add_task("b")

    assert await registry.handle(state, "/done 2") == "Marked as done: b"
    assert [t.completed for t in state.store.tasks] == [False, True]
    assert await registry.handle(state, "/t 2") == "Marked as not done: b"
    assert [t.completed for t in state.store.tasks] == [False, False]
    await state.store.flush()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("/done", "Usage: /done N"),
        ("/done x", "Not a task number: x"),
        ("/done 0", "No task #0"),
        ("/done 3", "No task #3"),
    ],
)
async def test_done_bad_positions(state: AppState, line: str, expected: str) -> None:
    state.store.add_task("only one")
    before = state.store.tasks

    reply = await registry.handle(state, line)

    assert expected in (reply or "")
    assert state.store.tasks == before
    await state.store.flush()


@pytest.mark.asyncio
async def test_delete_requires_confirmation(state: AppState) -> None:
    state.store.add_task("keep")
    state.store.add_task("drop")
    asked: list[str] = []

    reply = await registry.handle(state, "/del 2", confirm=_confirm_with(False, asked))
    assert reply == "Cancelled."
    assert asked == ['Delete "drop"?']
    assert len(state.store) == 2

    reply = await registry.handle(state, "/rm 2", confirm=_confirm_with(True))
    assert reply == "Deleted: drop"
    assert [t.text for t in state.store.tasks] == ["keep"]
    await state.store.flush()


@pytest.mark.asyncio
async def test_delete_without_prompt_is_refused_unless_disabled(state: AppState) -> None:
    state.store.add_task("x")

    reply = await registry.handle(state, "/del 1")
    assert "needs confirmation" in (reply or "")
    assert len(state.store) == 1

    state.confirm_delete = False
    assert await registry.handle(state, "/del 1") == "Deleted: x"
    assert state.store.tasks == ()
    await state.store.flush()


@pytest.mark.asyncio
async def test_theme_toggle_and_explicit(state: AppState) -> None:
    assert await registry.handle(state, "/theme") == "Theme: dark"
    assert state.theme is Theme.DARK
    assert await registry.handle(state, "/theme dark") == "Theme: dark"
    assert await registry.handle(state, "/theme light") == "Theme: light"
    assert "Usage" in (await registry.handle(state, "/theme blue") or "")
    assert state.theme is Theme.LIGHT


@pytest.mark.asyncio
async def test_list_and_status(state: AppState) -> None:
    listing = await registry.handle(state, "/list")
    assert "No tasks yet" in (listing or "")

    task = state.store.add_task("Buy milk")
    state.store.toggle_task(task.id)
    await state.store.flush()

    listing = await registry.handle(state, "/ls") or ""
    assert "1. [x] Buy milk" in listing
    status = await registry.handle(state, "/status") or ""
    assert "Tasks: 1 (1 done)" in status
    assert "ok (revision 2)" in status


@pytest.mark.asyncio
async def test_help_lists_commands(state: AppState) -> None:
    text = await registry.handle(state, "/help") or ""
    for name in ("/help", "/list", "/done", "/del", "/theme", "/status", "/exit"):
        assert name in text
