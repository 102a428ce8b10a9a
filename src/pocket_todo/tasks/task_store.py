# src/pocket_todo/tasks/task_store.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import StrEnum

from ..core.ports import KeyValueStorage
from .task_models import EmptyTaskError, Task, TaskDecodeError, TaskList, decode_tasks, encode_tasks

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


def new_task_id() -> str:
    return uuid.uuid4().hex


class StoreEventKind(StrEnum):
    HYDRATED = "hydrated"
    ADDED = "added"
    TOGGLED = "toggled"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class StoreEvent:
    kind: StoreEventKind
    tasks: TaskList
    task_id: str | None = None


StoreListener = Callable[[StoreEvent], None]
# Called synchronously after each observed change of the task list.


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of one write-through of the whole task list."""

    revision: int
    ok: bool
    error: BaseException | None = None


class TaskStore:
    """
    In-memory ordered task list, written through to a key/value storage.

    Mutations are synchronous and total:
    - add_task() appends (or raises EmptyTaskError without mutating)
    - toggle_task() / delete_task() are no-ops for unknown ids

    Every successful mutation notifies subscribers and writes the *entire* list:
    - inside a running event loop: scheduled as a task, chained after the
      previous write so writes land in mutation order
    - without a running loop: performed before the mutation returns
    Write failures are logged and kept as WriteResult values; the in-memory
    state is never rolled back.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        id_factory: Callable[[], str] = new_task_id,
    ) -> None:
        self._storage = storage
        self._key = key
        self._id_factory = id_factory
        self._tasks: TaskList = ()
        self._listeners: list[StoreListener] = []
        self._pending: list[asyncio.Task[WriteResult]] = []
        self._revision = 0
        self.last_write: WriteResult | None = None

    @property
    def tasks(self) -> TaskList:
        return self._tasks

    @property
    def key(self) -> str:
        return self._key

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- observers ----

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, kind: StoreEventKind, task_id: str | None = None) -> None:
        event = StoreEvent(kind=kind, tasks=self._tasks, task_id=task_id)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Store listener failed on %s event", kind.value)

    # ---- persistence ----

    async def hydrate(self) -> None:
        """
        Load the list once at startup.

        Missing key -> empty list. Read or decode failures are logged and
        also leave the list empty. Never raises; does not write back.
        """
        tasks: TaskList = ()
        try:
            payload = await self._storage.read(self._key)
        except Exception:
            logger.exception("Failed to read tasks key=%s; starting empty", self._key)
            payload = None

        if payload is not None:
            try:
                tasks = decode_tasks(payload)
            except TaskDecodeError:
                logger.exception("Failed to decode stored tasks key=%s; starting empty", self._key)
                tasks = ()

        self._tasks = tasks
        logger.info("TaskStore hydrated key=%s total=%s", self._key, len(tasks))
        self._notify(StoreEventKind.HYDRATED)

    def _schedule_write(self) -> None:
        self._revision += 1
        snapshot = encode_tasks(self._tasks)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Synchronous caller: no loop to hand the write to, so do it now.
            asyncio.run(self._write(self._revision, snapshot))
            return

        previous = self._pending[-1] if self._pending else None
        write = loop.create_task(self._write(self._revision, snapshot, after=previous))
        self._pending.append(write)
        write.add_done_callback(self._forget_write)

    def _forget_write(self, write: asyncio.Task[WriteResult]) -> None:
        with contextlib.suppress(ValueError):
            self._pending.remove(write)

    async def _write(
        self,
        revision: int,
        payload: str,
        *,
        after: asyncio.Task[WriteResult] | None = None,
    ) -> WriteResult:
        if after is not None:
            # asyncio.wait never raises the awaited task's outcome.
            await asyncio.wait([after])
        try:
            await self._storage.write(self._key, payload)
        except Exception as e:
            logger.exception("Failed to save tasks key=%s revision=%s", self._key, revision)
            result = WriteResult(revision=revision, ok=False, error=e)
        else:
            logger.debug("Saved tasks key=%s revision=%s", self._key, revision)
            result = WriteResult(revision=revision, ok=True)
        self.last_write = result
        return result

    async def flush(self) -> list[WriteResult]:
        """
        Wait for the writes still in flight; results come back in scheduling order.

        Writes that already finished are not kept; see last_write for the latest outcome.
        """
        pending = list(self._pending)
        if not pending:
            return []
        results = list(await asyncio.gather(*pending))
        # Done callbacks run on a later loop iteration; drop these now.
        for write in pending:
            self._forget_write(write)
        return results

    # ---- mutations ----

    def _fresh_id(self) -> str:
        taken = {t.id for t in self._tasks}
        while True:
            task_id = self._id_factory()
            if task_id not in taken:
                return task_id
            logger.debug("Generated task id collided (%s); retrying", task_id)

    def add_task(self, raw_text: str) -> Task:
        text = (raw_text or "").strip()
        if not text:
            raise EmptyTaskError()

        task = Task(id=self._fresh_id(), text=text)
        self._tasks = (*self._tasks, task)
        logger.debug("Task added id=%s", task.id)

        self._notify(StoreEventKind.ADDED, task.id)
        self._schedule_write()
        return task

    def toggle_task(self, task_id: str) -> bool:
        if self.get(task_id) is None:
            return False

        self._tasks = tuple(
            replace(t, completed=not t.completed) if t.id == task_id else t for t in self._tasks
        )
        logger.debug("Task toggled id=%s", task_id)

        self._notify(StoreEventKind.TOGGLED, task_id)
        self._schedule_write()
        return True

    def delete_task(self, task_id: str) -> bool:
        if self.get(task_id) is None:
            return False

        self._tasks = tuple(t for t in self._tasks if t.id != task_id)
        logger.debug("Task deleted id=%s", task_id)

        self._notify(StoreEventKind.DELETED, task_id)
        self._schedule_write()
        return True
