"""Display ordering for the task list.

Sorting is always done on a copy; storage order (insertion order) is never
changed. Both policies are expressed as key functions so Python's stable
sort keeps insertion order among equal keys.
"""
from __future__ import annotations
from enum import Enum
from typing import Callable, Dict, List, Sequence, Tuple

from .models import Task


class OrderingPolicy(str, Enum):
    SCHEDULE_ONLY = 'schedule-only'
    PRIORITY_FIRST = 'priority-first'


def schedule_key(task: Task) -> Tuple[bool, str]:
    """Scheduled tasks first, then by HH:MM (lexicographic == chronological)."""
    return (task.scheduled_time is None, task.scheduled_time or '')


def priority_key(task: Task) -> Tuple[int, bool, str]:
    return (task.priority.rank,) + schedule_key(task)


_KEYS: Dict[OrderingPolicy, Callable[[Task], tuple]] = {
    OrderingPolicy.SCHEDULE_ONLY: schedule_key,
    OrderingPolicy.PRIORITY_FIRST: priority_key,
}


def sort_for_display(tasks: Sequence[Task], policy: OrderingPolicy = OrderingPolicy.PRIORITY_FIRST) -> List[Task]:
    return sorted(tasks, key=_KEYS[OrderingPolicy(policy)])
