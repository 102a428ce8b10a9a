# src/pocket_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage backends and front ends swappable and makes testing easier.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol


class KeyValueStorage(Protocol):
    """
    Async key/value persistence.

    read() returns None when the key was never written.
    write() raises on failure; callers decide how to recover.
    """

    async def read(self, key: str) -> str | None: ...

    async def write(self, key: str, value: str) -> None: ...


ConfirmPrompt = Callable[[str], Awaitable[bool]]
# UI-side yes/no question, e.g. before deleting a task.
