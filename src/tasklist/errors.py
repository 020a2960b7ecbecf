"""Error taxonomy for the task engine.

Blank text and unknown ids never reach the caller as exceptions: add,
toggle and remove treat them as no-ops. The classes still exist so that
lookups and validation helpers have something precise to raise.
"""
from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .models import Task


class TaskListError(Exception):
    """Base class for every error raised by the engine."""


class InvalidInput(TaskListError, ValueError):
    """Malformed scheduled time or priority passed to add."""


class NotFound(TaskListError, LookupError):
    def __init__(self, task_id: int):
        super().__init__(f'Task id {task_id} not found.')
        self.task_id = task_id


class CorruptState(TaskListError):
    """Persisted data exists but cannot be turned back into tasks."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f'Corrupt task file {path}: {reason}')
        self.path = path
        self.reason = reason


class PersistenceUnavailable(TaskListError):
    """A save failed.

    ``tasks`` holds the collection that could not be written so callers can
    keep it as their in-memory state; the next successful save makes it
    durable.
    """

    def __init__(self, path: Path, reason: str, tasks: Optional[Sequence['Task']] = None):
        super().__init__(f'Could not save tasks to {path}: {reason}')
        self.path = path
        self.reason = reason
        self.tasks = list(tasks) if tasks is not None else []
