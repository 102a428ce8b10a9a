# src/pocket_todo/storage/json_file.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import re
import tempfile
from pathlib import Path

from .errors import StorageError

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class JsonFileStorage:
    """
    One file per key under a directory: <root>/<key>.json.

    Each write goes to its own temp file first and is moved into place with
    os.replace, so a crash mid-write never leaves a truncated payload behind.
    Blocking file I/O runs in a worker thread.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._root.mkdir(parents=True, exist_ok=True)
        logger.info("JsonFileStorage ready dir=%s", self._root)

    def path_for(self, key: str) -> Path:
        if not key or not _KEY_RE.match(key) or key.startswith("."):
            raise StorageError(f"invalid storage key: {key!r}")
        return self._root / f"{key}.json"

    async def read(self, key: str) -> str | None:
        path = self.path_for(key)
        return await asyncio.to_thread(self._read_sync, path)

    async def write(self, key: str, value: str) -> None:
        path = self.path_for(key)
        await asyncio.to_thread(self._write_sync, path, value)

    @staticmethod
    def _read_sync(path: Path) -> str | None:
        if not path.exists():
            return None
        try:
            return path.read_text("utf-8")
        except OSError as e:
            raise StorageError(f"failed to read {path}") from e

    @staticmethod
    def _write_sync(path: Path, value: str) -> None:
        tmp: Path | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # A private temp file per write, so overlapping writes never share one.
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
            tmp = Path(tmp_name)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except OSError as e:
            if tmp is not None:
                with contextlib.suppress(OSError):
                    tmp.unlink()
            raise StorageError(f"failed to write {path}") from e

        with contextlib.suppress(OSError):
            # Task text is personal; keep the file private on disk.
            os.chmod(path, 0o600)
