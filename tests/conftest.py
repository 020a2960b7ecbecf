# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.models import Priority, Task
from tasklist.operations import TaskOperations
from tasklist.storage import TaskRepository

from .fakes import FIXED_NOW


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def repo(tasks_file: Path) -> TaskRepository:
    return TaskRepository(tasks_file)


@pytest.fixture()
def clock():
    return lambda: FIXED_NOW


@pytest.fixture()
def ops(repo: TaskRepository, clock) -> TaskOperations:
    return TaskOperations(repo, clock=clock)


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        Task(id=1, text="A", created_at=FIXED_NOW, priority=Priority.HIGH),
        Task(id=2, text="B", created_at=FIXED_NOW, scheduled_time="09:00", priority=Priority.HIGH),
        Task(id=3, text="C", completed=True, created_at=FIXED_NOW, scheduled_time="08:00", priority=Priority.LOW),
    ]
