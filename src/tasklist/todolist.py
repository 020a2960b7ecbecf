"""Session object tying the engine together.

A TodoList holds the one live task collection for the process. Front ends
call add/toggle/remove with raw action parameters and read back view();
they never see the repository or touch storage order.
"""
from __future__ import annotations
import logging
from datetime import datetime
from typing import List, Optional, Union

from .config import Settings
from .errors import PersistenceUnavailable
from .models import Priority, Task, utc_now
from .operations import Clock, TaskOperations
from .ordering import OrderingPolicy, sort_for_display
from .presentation import EMPTY_MESSAGE, TaskView, decorate, format_clock
from .storage import TaskRepository

logger = logging.getLogger(__name__)


class TodoList:
    def __init__(
        self,
        repository: TaskRepository,
        tasks: Optional[List[Task]] = None,
        *,
        policy: OrderingPolicy = OrderingPolicy.PRIORITY_FIRST,
        clock: Optional[Clock] = None,
    ):
        self.repository = repository
        self.policy = OrderingPolicy(policy)
        self.clock: Clock = clock or utc_now
        self.ops = TaskOperations(repository, clock=self.clock)
        self.tasks: List[Task] = list(tasks) if tasks is not None else []
        self.ops.seed(self.tasks)

    @classmethod
    def open(cls, settings: Optional[Settings] = None, *, clock: Optional[Clock] = None) -> 'TodoList':
        """Load the persisted list (a corrupt file starts empty) and wrap it."""
        settings = settings or Settings()
        repository = TaskRepository(settings.tasks_file)
        return cls(repository, repository.load_or_empty(), policy=settings.policy, clock=clock)

    # -------------------- task operations --------------------
    # Each returns True when the change reached disk. On a failed save the
    # in-memory list still reflects the change.
    def add(self, text: str, scheduled_time: Optional[str] = None,
            priority: Union[Priority, str, None] = None) -> bool:
        return self._apply(lambda cur: self.ops.add(cur, text, scheduled_time, priority))

    def toggle(self, task_id: int) -> bool:
        return self._apply(lambda cur: self.ops.toggle(cur, task_id))

    def remove(self, task_id: int) -> bool:
        return self._apply(lambda cur: self.ops.remove(cur, task_id))

    def _apply(self, mutation) -> bool:
        try:
            self.tasks = mutation(self.tasks)
        except PersistenceUnavailable as exc:
            self.tasks = exc.tasks
            logger.warning('Change kept in memory only: %s', exc)
            return False
        return True

    # -------------------- display --------------------
    def ordered(self) -> List[Task]:
        return sort_for_display(self.tasks, self.policy)

    def view(self) -> List[TaskView]:
        return [decorate(t) for t in self.ordered()]

    def placeholder(self) -> Optional[str]:
        """Text to show instead of rows when the list is empty."""
        return None if self.tasks else EMPTY_MESSAGE

    def clock_text(self, now: Optional[datetime] = None) -> str:
        return format_clock(now or self.clock(), with_seconds=True)

    def __len__(self) -> int:
        return len(self.tasks)

    def __str__(self) -> str:
        done = sum(1 for t in self.tasks if t.completed)
        return f'{len(self.tasks)} tasks, {done} done'
