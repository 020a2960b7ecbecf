"""Settings for a task list session.

Settings are plain values handed to TodoList.open(); nothing is read from
the environment.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from .ordering import OrderingPolicy

DEFAULT_TASKS_FILE = Path.home() / '.tasklist' / 'tasks.json'


@dataclass(frozen=True)
class Settings:
    tasks_file: Path = field(default_factory=lambda: DEFAULT_TASKS_FILE)
    policy: OrderingPolicy = OrderingPolicy.PRIORITY_FIRST

    def with_overrides(self, **changes: Any) -> 'Settings':
        if 'tasks_file' in changes:
            changes['tasks_file'] = Path(changes['tasks_file']).expanduser()
        if 'policy' in changes:
            changes['policy'] = OrderingPolicy(changes['policy'])
        return replace(self, **changes)
