# src/pocket_todo/ui/render.py

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.task_models import Task
from .theme import Styler

EMPTY_LIST_TEXT = "No tasks yet. Add a new task!"


def render_task_list(tasks: Sequence[Task], styler: Styler, *, title: str = "My Tasks") -> str:
    """Numbered, themed listing; positions are 1-based and match /done N and /del N."""
    lines = [styler.title(title)]
    if not tasks:
        lines.append("  " + styler.empty(EMPTY_LIST_TEXT))
        return "\n".join(lines)

    width = len(str(len(tasks)))
    for pos, task in enumerate(tasks, start=1):
        mark = "[x]" if task.completed else "[ ]"
        num = styler.primary(f"{pos:>{width}}.")
        lines.append(f"  {num} {mark} {styler.task(task.text, completed=task.completed)}")

    done = sum(1 for t in tasks if t.completed)
    lines.append(styler.empty(f"  {done}/{len(tasks)} done"))
    return "\n".join(lines)
