# tests/test_operations.py

from __future__ import annotations

import pytest

from tasklist.errors import InvalidInput, NotFound, PersistenceUnavailable
from tasklist.models import Priority
from tasklist.operations import TaskOperations

from .fakes import FIXED_NOW, FailingRepository


def test_add_appends_task_with_defaults(ops: TaskOperations) -> None:
    tasks = ops.add([], "  water the plants  ")
    assert len(tasks) == 1
    task = tasks[0]
    assert task.text == "water the plants"
    assert task.completed is False
    assert task.created_at == FIXED_NOW
    assert task.scheduled_time is None
    assert task.priority is Priority.MEDIUM


def test_add_persists_new_collection(ops: TaskOperations, repo) -> None:
    tasks = ops.add([], "gym", "7:05", "high")
    assert repo.load() == tasks
    assert tasks[0].scheduled_time == "07:05"
    assert tasks[0].priority is Priority.HIGH


@pytest.mark.parametrize("blank", ["", "   ", "\t\n"])
def test_add_rejects_blank_text(ops: TaskOperations, repo, sample_tasks, blank: str) -> None:
    assert ops.add(sample_tasks, blank, "10:00", Priority.LOW) == sample_tasks
    assert not repo.path.exists()


def test_add_keeps_insertion_order_and_does_not_mutate_input(ops: TaskOperations, sample_tasks) -> None:
    before = list(sample_tasks)
    tasks = ops.add(sample_tasks, "D")
    assert sample_tasks == before
    assert [t.text for t in tasks] == ["A", "B", "C", "D"]


def test_add_rejects_malformed_time_and_priority(ops: TaskOperations) -> None:
    with pytest.raises(InvalidInput):
        ops.add([], "x", scheduled_time="noon")
    with pytest.raises(InvalidInput):
        ops.add([], "x", priority="urgent")
    with pytest.raises(InvalidInput):
        ops.add([], "x", scheduled_time=930)


def test_ids_are_unique_and_never_reused(ops: TaskOperations) -> None:
    tasks: list = []
    for n in range(20):
        tasks = ops.add(tasks, f"task {n}")
    ids = [t.id for t in tasks]
    assert len(set(ids)) == 20

    highest = max(ids)
    tasks = ops.remove(tasks, highest)
    tasks = ops.add(tasks, "after removal")
    assert tasks[-1].id > highest


def test_ids_continue_after_existing_collection(ops: TaskOperations, sample_tasks) -> None:
    tasks = ops.add(sample_tasks, "next")
    assert tasks[-1].id == 4


def test_toggle_flips_only_target(ops: TaskOperations, sample_tasks) -> None:
    tasks = ops.toggle(sample_tasks, 2)
    assert [t.completed for t in tasks] == [False, True, True]
    assert sample_tasks[1].completed is False


def test_toggle_is_self_inverse(ops: TaskOperations, sample_tasks) -> None:
    for task in sample_tasks:
        assert ops.toggle(ops.toggle(sample_tasks, task.id), task.id) == sample_tasks


def test_unknown_id_is_a_noop(ops: TaskOperations, sample_tasks, repo) -> None:
    assert ops.toggle(sample_tasks, 99) == sample_tasks
    assert ops.remove(sample_tasks, 99) == sample_tasks
    assert repo.load() == sample_tasks


def test_remove_excludes_target(ops: TaskOperations, sample_tasks, repo) -> None:
    tasks = ops.remove(sample_tasks, 1)
    assert [t.id for t in tasks] == [2, 3]
    assert len(sample_tasks) == 3
    assert repo.load() == tasks


def test_get_raises_not_found(sample_tasks) -> None:
    assert TaskOperations.get(sample_tasks, 2).text == "B"
    with pytest.raises(NotFound):
        TaskOperations.get(sample_tasks, 42)


def test_failed_save_carries_new_state(tasks_file, clock, sample_tasks) -> None:
    failing = FailingRepository(tasks_file)
    ops = TaskOperations(failing, clock=clock)
    with pytest.raises(PersistenceUnavailable) as info:
        ops.toggle(sample_tasks, 1)
    assert info.value.tasks[0].completed is True
    assert failing.attempts == 1
