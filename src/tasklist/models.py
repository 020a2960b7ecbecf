"""Data models for the task list.

Exposes the Task dataclass and the Priority enum. Tasks are immutable
values: toggling produces a replaced copy, so a collection handed out to a
caller never changes underneath it.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from .errors import InvalidInput

_TIME_RE = re.compile(r'^(\d{1,2}):(\d{2})$')


class Priority(str, Enum):
    HIGH = 'high'
    MEDIUM = 'medium'
    LOW = 'low'

    @property
    def rank(self) -> int:
        """Sort rank; high sorts first."""
        return _PRIORITY_RANK[self]

    @classmethod
    def coerce(cls, value: Union['Priority', str, None]) -> 'Priority':
        """Accept a member, a case-insensitive name or None (-> MEDIUM)."""
        if value is None:
            return cls.MEDIUM
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidInput(f'Unknown priority: {value!r}')


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


def normalize_scheduled_time(value: Optional[str]) -> Optional[str]:
    """Return a zero-padded HH:MM string, or None for a blank value.

    ``9:05`` becomes ``09:05`` so that plain string comparison stays
    chronological.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInput(f'Scheduled time must be a string, got {value!r}')
    raw = value.strip()
    if not raw:
        return None
    m = _TIME_RE.match(raw)
    if not m:
        raise InvalidInput(f'Scheduled time must be HH:MM, got {value!r}')
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise InvalidInput(f'Scheduled time out of range: {value!r}')
    return f'{hour:02d}:{minute:02d}'


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Task:
    """A single to-do item.

    Fields:
        id: Integer id, unique within the collection and never reused in a session.
        text: Trimmed, non-empty text.
        completed: Done flag; the only field that changes after creation.
        created_at: Aware datetime of creation.
        scheduled_time: Zero-padded "HH:MM" or None when unscheduled.
        priority: One of high/medium/low.
    """
    id: int
    text: str
    completed: bool = False
    created_at: datetime = field(default_factory=utc_now)
    scheduled_time: Optional[str] = None
    priority: Priority = Priority.MEDIUM

    def toggled(self) -> 'Task':
        return replace(self, completed=not self.completed)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f'Task(id={self.id}, text={self.text}, completed={self.completed})'
