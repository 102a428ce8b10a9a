"""
Storage backends implementing the KeyValueStorage port.

- json_file.py: one JSON file per key (default)
- sqlite_kv.py: single-table SQLite key/value store
"""

from __future__ import annotations

from pathlib import Path

from .errors import StorageError
from .json_file import JsonFileStorage
from .sqlite_kv import SqliteStorage

BACKENDS = ("json", "sqlite")


def open_storage(backend: str, path: str | Path) -> JsonFileStorage | SqliteStorage:
    """Build a storage backend by name ("json" or "sqlite")."""
    name = (backend or "").strip().lower()
    if name == "json":
        return JsonFileStorage(path)
    if name == "sqlite":
        return SqliteStorage(path)
    raise ValueError(f"Unknown storage backend: {backend!r} (expected one of {', '.join(BACKENDS)})")


__all__ = ["BACKENDS", "JsonFileStorage", "SqliteStorage", "StorageError", "open_storage"]
