"""Glyph, color and time-format helpers for rendering tasks.

Decisions:
- Completed tasks always show the done glyph, whatever their text says.
- Keyword glyphs are matched case-insensitively as substrings, in the
  order declared in KEYWORD_GLYPHS; the first hit wins.
- Priority colors are hex tokens; the front end decides how to paint them.
- Clock strings use the host's local time zone but a fixed 24-hour
  HH:MM layout rather than the locale's 12/24-hour preference, so rows
  line up and match the HH:MM scheduled times shown beside them.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .models import Priority, Task

DONE_GLYPH = '\u2705'      # ✅
DEFAULT_GLYPH = '\u2728'   # ✨
ALARM_GLYPH = '\u23F0'     # ⏰

KEYWORD_GLYPHS: Tuple[Tuple[str, str], ...] = (
    ('bath', '\U0001F6C1'),   # 🛁
    ('study', '\U0001F4DA'),  # 📚
    ('eat', '\U0001F355'),    # 🍕
    ('sleep', '\U0001F634'),  # 😴
    ('gym', '\U0001F4AA'),    # 💪
)

HEX_HIGH = '#E5484D'
HEX_MEDIUM = '#F5A524'
HEX_LOW = '#46A758'

PRIORITY_STYLE = {
    Priority.HIGH: ('\U0001F534', HEX_HIGH),     # 🔴
    Priority.MEDIUM: ('\U0001F7E1', HEX_MEDIUM), # 🟡
    Priority.LOW: ('\U0001F7E2', HEX_LOW),       # 🟢
}

EMPTY_MESSAGE = f'No tasks yet! Add something cute {DEFAULT_GLYPH}'


def glyph_for(task: Task) -> str:
    if task.completed:
        return DONE_GLYPH
    text = task.text.lower()
    for keyword, glyph in KEYWORD_GLYPHS:
        if keyword in text:
            return glyph
    return DEFAULT_GLYPH


def priority_glyph_and_color(priority: Priority) -> Tuple[str, str]:
    return PRIORITY_STYLE[priority]


def format_clock(instant: datetime, with_seconds: bool = False) -> str:
    """Render ``instant`` as local HH:MM (HH:MM:SS for the live clock).

    Naive datetimes are taken to be local already.
    """
    local = instant.astimezone() if instant.tzinfo is not None else instant
    return local.strftime('%H:%M:%S' if with_seconds else '%H:%M')


@dataclass(frozen=True)
class TaskView:
    """Everything a front end needs to draw one row."""
    task: Task
    glyph: str
    priority_glyph: str
    priority_color: str
    added_at: str
    schedule_label: Optional[str]

    @property
    def added_label(self) -> str:
        return f'Added at {self.added_at}'


def decorate(task: Task) -> TaskView:
    pglyph, pcolor = priority_glyph_and_color(task.priority)
    return TaskView(
        task=task,
        glyph=glyph_for(task),
        priority_glyph=pglyph,
        priority_color=pcolor,
        added_at=format_clock(task.created_at),
        schedule_label=f'{ALARM_GLYPH} {task.scheduled_time}' if task.scheduled_time else None,
    )
