# tests/fakes.py

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(slots=True)
class MemoryStorage:
    """
    In-memory KeyValueStorage.

    - keeps the latest value per key
    - records every write for ordering assertions
    """

    data: dict[str, str] = field(default_factory=dict)
    writes: list[tuple[str, str]] = field(default_factory=list)
    reads: list[str] = field(default_factory=list)

    async def read(self, key: str) -> str | None:
        self.reads.append(key)
        return self.data.get(key)

    async def write(self, key: str, value: str) -> None:
        # Yield once so writes really interleave with the caller.
        await asyncio.sleep(0)
        self.writes.append((key, value))
        self.data[key] = value


@dataclass(slots=True)
class FailingStorage:
    """Storage whose reads and/or writes raise, for error-path tests."""

    fail_reads: bool = False
    fail_writes: bool = True
    payload: str | None = None
    write_attempts: int = 0

    async def read(self, key: str) -> str | None:
        if self.fail_reads:
            raise OSError("disk unavailable")
        return self.payload

    async def write(self, key: str, value: str) -> None:
        self.write_attempts += 1
        if self.fail_writes:
            raise OSError("disk full")
        self.payload = value


class SequenceIds:
    """Deterministic id factory: yields the given ids in order."""

    def __init__(self, ids: Iterable[str]) -> None:
        self._ids = iter(ids)
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return next(self._ids)
