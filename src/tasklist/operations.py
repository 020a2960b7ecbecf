"""Mutation operations: the only path by which the task collection changes.

Every operation takes the current collection, returns a new list and never
touches the caller's sequence. Each call ends with exactly one save.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence, Union

from .errors import NotFound, PersistenceUnavailable
from .models import Priority, Task, normalize_scheduled_time, utc_now
from .storage import TaskRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TaskOperations:
    def __init__(self, repository: TaskRepository, clock: Optional[Clock] = None, next_id: int = 1):
        self.repository = repository
        self.clock: Clock = clock or utc_now
        self._next_id: int = next_id

    # -------------------- id management --------------------
    def seed(self, tasks: Sequence[Task]) -> None:
        """Move the id counter past every id in ``tasks``."""
        if tasks:
            self._next_id = max(self._next_id, max(t.id for t in tasks) + 1)

    def _allocate_id(self, current: Sequence[Task]) -> int:
        self.seed(current)
        nid = self._next_id
        self._next_id += 1
        return nid

    # -------------------- queries --------------------
    @staticmethod
    def get(current: Sequence[Task], task_id: int) -> Task:
        for task in current:
            if task.id == task_id:
                return task
        raise NotFound(task_id)

    # -------------------- task operations --------------------
    def add(
        self,
        current: Sequence[Task],
        text: str,
        scheduled_time: Optional[str] = None,
        priority: Union[Priority, str, None] = None,
    ) -> List[Task]:
        """Append a new task; blank text returns ``current`` unchanged without saving.

        Raises InvalidInput for a malformed time or priority, and
        PersistenceUnavailable (carrying the new list) if the save fails.
        """
        trimmed = (text or '').strip()
        if not trimmed:
            logger.debug('Ignoring add with blank text')
            return list(current)
        scheduled = normalize_scheduled_time(scheduled_time)
        level = Priority.coerce(priority)
        task = Task(
            id=self._allocate_id(current),
            text=trimmed,
            completed=False,
            created_at=self.clock(),
            scheduled_time=scheduled,
            priority=level,
        )
        logger.debug('Adding task %d (%s, %s)', task.id, level.value, scheduled or 'unscheduled')
        return self._commit([*current, task])

    def toggle(self, current: Sequence[Task], task_id: int) -> List[Task]:
        updated: List[Task] = []
        found = False
        for task in current:
            if task.id == task_id:
                task = task.toggled()
                found = True
            updated.append(task)
        if not found:
            logger.debug('Toggle: task id %s not found', task_id)
        return self._commit(updated)

    def remove(self, current: Sequence[Task], task_id: int) -> List[Task]:
        updated = [t for t in current if t.id != task_id]
        if len(updated) == len(current):
            logger.debug('Remove: task id %s not found', task_id)
        return self._commit(updated)

    def _commit(self, tasks: List[Task]) -> List[Task]:
        try:
            self.repository.save(tasks)
        except PersistenceUnavailable as exc:
            exc.tasks = list(tasks)
            raise
        return tasks
