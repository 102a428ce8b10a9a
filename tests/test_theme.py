# tests/test_theme.py

from __future__ import annotations

import pytest

from pocket_todo.core.state import AppState
from pocket_todo.tasks.task_models import Task
from pocket_todo.ui.render import EMPTY_LIST_TEXT, render_task_list
from pocket_todo.ui.theme import PALETTES, RESET, STRIKE, Styler, Theme, colors_enabled, fg


def test_theme_toggle_and_parse() -> None:
    assert Theme.LIGHT.toggle() is Theme.DARK
    assert Theme.DARK.toggle() is Theme.LIGHT
    assert Theme.parse(" Dark ") is Theme.DARK
    assert Theme.parse("sepia") is Theme.LIGHT
    assert Theme.parse(None) is Theme.LIGHT
    assert set(PALETTES) == {Theme.LIGHT, Theme.DARK}


@pytest.mark.asyncio
async def test_theme_does_not_touch_store(state: AppState) -> None:
    state.store.add_task("a")
    before = (state.store.tasks, state.store.revision)

    state.toggle_theme()

    assert state.theme is Theme.DARK
    assert (state.store.tasks, state.store.revision) == before
    await state.store.flush()


def test_fg_truecolor_and_256() -> None:
    assert fg("#009688", truecolor=True) == "\033[38;2;0;150;136m"
    assert fg("#ffffff", truecolor=False) == "\033[38;5;231m"
    assert fg("#000000", truecolor=False) == "\033[38;5;16m"


def test_colors_enabled_honors_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert colors_enabled() is False  # NO_COLOR from conftest

    monkeypatch.delenv("NO_COLOR")
    monkeypatch.setenv("FORCE_COLOR", "1")
    assert colors_enabled() is True


def test_styler_marks_completed_tasks() -> None:
    styler = Styler(Theme.DARK, enabled=True)

    done = styler.task("x", completed=True)
    todo = styler.task("x", completed=False)

    assert STRIKE in done and done.endswith(RESET)
    assert STRIKE not in todo
    assert Styler(Theme.DARK, enabled=False).task("x", completed=True) == "x"


def test_render_empty_and_numbered() -> None:
    styler = Styler(Theme.LIGHT, enabled=False)

    assert render_task_list([], styler, title="T") == f"T\n  {EMPTY_LIST_TEXT}"

    tasks = [Task(id=str(i), text=f"t{i}", completed=i % 2 == 0) for i in range(1, 11)]
    out = render_task_list(tasks, styler, title="T").splitlines()

    assert out[1] == "   1. [ ] t1"
    assert out[2] == "   2. [x] t2"
    assert out[10] == "  10. [x] t10"
    assert out[-1] == "  5/10 done"
