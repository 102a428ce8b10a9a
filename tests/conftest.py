# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pocket_todo.core.state import AppState
from pocket_todo.tasks.task_store import TaskStore
from pocket_todo.ui.theme import Theme

from .fakes import MemoryStorage


@pytest.fixture(autouse=True)
def _plain_output(monkeypatch: pytest.MonkeyPatch) -> None:
    """Render without ANSI colors so assertions can match plain text."""
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("FORCE_COLOR", raising=False)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the caller's environment.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="pocket-todo",
        log_level="DEBUG",
        data_dir=data_dir,
        storage_backend="json",
        storage_path=data_dir / "storage",
        storage_key="tasks",
        theme="light",
        confirm_delete=True,
    )


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def store(storage: MemoryStorage) -> TaskStore:
    return TaskStore(storage)


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    """AppState wired with an in-memory storage backend."""
    return AppState(
        settings=settings,
        store=store,
        theme=Theme.LIGHT,
        confirm_delete=True,
    )
