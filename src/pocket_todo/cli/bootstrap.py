# src/pocket_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the storage backend and TaskStore into AppState,
- hydrates the store and flushes it on shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage import open_storage
from ..tasks.task_store import TaskStore
from ..ui.theme import Theme

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.storage_backend == "sqlite":
        settings.storage_path.parent.mkdir(parents=True, exist_ok=True)
    else:
        settings.storage_path.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). The store is NOT hydrated here.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    storage = open_storage(settings.storage_backend, settings.storage_path)
    store = TaskStore(storage, key=settings.storage_key)

    return AppState(
        settings=settings,
        store=store,
        theme=Theme.parse(settings.theme),
        confirm_delete=settings.confirm_delete,
    )


async def start_state(*, settings=None) -> AppState:
    """create_initial_state() followed by the one-time hydrate."""
    state = create_initial_state(settings=settings)
    await state.store.hydrate()
    return state


async def shutdown_state(state: AppState) -> None:
    """Wait for in-flight writes and report any that failed (no exceptions escape)."""
    results = await state.store.flush()
    failed = [r for r in results if not r.ok]
    if failed:
        logger.warning(
            "%d of %d pending task writes failed; last failure: %s",
            len(failed),
            len(results),
            failed[-1].error,
        )
    else:
        logger.info("Flushed %d pending task write(s).", len(results))
