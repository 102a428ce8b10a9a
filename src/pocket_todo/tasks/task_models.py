# src/pocket_todo/tasks/task_models.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

TaskList = tuple["Task", ...]


class TaskError(ValueError):
    """Base class for task validation / decoding problems."""


class EmptyTaskError(TaskError):
    """Raised when a task would be created with blank text."""

    def __init__(self, message: str = "Task cannot be empty.") -> None:
        super().__init__(message)


class TaskDecodeError(TaskError):
    """Persisted payload could not be turned back into a task list."""


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: Any) -> Task:
        if not isinstance(raw, dict):
            raise TaskDecodeError(f"task record must be an object, got {type(raw).__name__}")

        task_id = raw.get("id")
        text = raw.get("text")
        completed = raw.get("completed", False)

        # Older payloads may carry numeric ids.
        if isinstance(task_id, int) and not isinstance(task_id, bool):
            task_id = str(task_id)
        if not isinstance(task_id, str) or not task_id:
            raise TaskDecodeError(f"task record has invalid id: {task_id!r}")
        if not isinstance(text, str) or not text.strip():
            raise TaskDecodeError(f"task {task_id} has invalid text: {text!r}")
        if not isinstance(completed, bool):
            raise TaskDecodeError(f"task {task_id} has invalid completed flag: {completed!r}")

        return cls(id=task_id, text=text, completed=completed)


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks as a JSON array, preserving order."""
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def decode_tasks(payload: str) -> TaskList:
    """
    Parse a JSON array produced by encode_tasks().

    Raises TaskDecodeError on malformed JSON or records.
    Duplicate ids are dropped (first occurrence wins) so the id
    uniqueness invariant holds after a load.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise TaskDecodeError(f"stored tasks are not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise TaskDecodeError(f"stored tasks must be a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    seen: set[str] = set()
    for raw in data:
        task = Task.from_dict(raw)
        if task.id in seen:
            logger.warning("Dropping duplicate task id=%s from stored payload", task.id)
            continue
        seen.add(task.id)
        out.append(task)
    return tuple(out)
