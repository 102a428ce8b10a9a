# src/pocket_todo/storage/errors.py

from __future__ import annotations


class StorageError(RuntimeError):
    """A storage backend failed to read or write a key."""
