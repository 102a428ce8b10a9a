# src/pocket_todo/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_store import TaskStore
from ..ui.theme import Theme


@dataclass
class AppState:
    """
    Everything a front end needs, wired once in cli/bootstrap.py.

    The task store is passed around through this object; nothing else holds it.
    """

    settings: object
    store: TaskStore
    theme: Theme = Theme.LIGHT
    confirm_delete: bool = True

    # Front ends stop their loop when this goes False.
    running: bool = True

    def toggle_theme(self) -> Theme:
        self.theme = self.theme.toggle()
        return self.theme
