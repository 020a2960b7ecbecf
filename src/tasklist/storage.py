"""Persistence for the task list (load/save with legacy migration).

The whole collection lives in one JSON file, rewritten in full on every
save. Decisions:
- Document shape is {"version": 1, "tasks": [...]}; a bare list (the
  original browser app's format) is still accepted on load.
- Entries written before ids existed get sequential ids past the largest
  existing one; entries without a priority load as "medium".
- A missing file is an empty list, never an error.
"""
from __future__ import annotations
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .errors import CorruptState, InvalidInput, PersistenceUnavailable
from .models import Priority, Task, normalize_scheduled_time

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

TaskEntry = Dict[str, Any]


class TaskRepository:
    def __init__(self, path: Path):
        self.path = Path(path)

    # -------------------- load --------------------
    def load(self) -> List[Task]:
        """Read tasks from disk in stored (insertion) order.

        Raises CorruptState when the file exists but cannot be decoded.
        """
        if not self.path.exists():
            logger.info('No task file at %s; starting empty', self.path)
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise CorruptState(self.path, f'invalid JSON ({exc})') from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise CorruptState(self.path, str(exc)) from exc
        tasks = self._tasks_from_document(data)
        logger.info('Loaded %d tasks from %s', len(tasks), self.path)
        return tasks

    def load_or_empty(self) -> List[Task]:
        """Like load(), but a corrupt file yields an empty list and a warning."""
        try:
            return self.load()
        except CorruptState as exc:
            logger.warning('%s; continuing with an empty task list', exc)
            return []

    def _tasks_from_document(self, data: Any) -> List[Task]:
        if isinstance(data, list):
            entries = data  # legacy: bare array
        elif isinstance(data, dict) and isinstance(data.get('tasks'), list):
            version = data.get('version', FORMAT_VERSION)
            if not _is_int(version) or version > FORMAT_VERSION:
                raise CorruptState(self.path, f'unsupported format version {version!r}')
            entries = data['tasks']
        else:
            raise CorruptState(self.path, 'expected a list of tasks')

        # first pass: ids already present decide where fresh ids start
        known_ids = [e.get('id') for e in entries if isinstance(e, dict) and _is_int(e.get('id'))]
        next_id = max(known_ids) + 1 if known_ids else 1

        tasks: List[Task] = []
        seen: set = set()
        for index, raw in enumerate(entries):
            if not isinstance(raw, dict):
                raise CorruptState(self.path, f'entry {index} is not an object')
            tid = raw.get('id')
            if _is_int(tid):
                assigned_id = tid
            else:
                assigned_id = next_id
                next_id += 1
            if assigned_id in seen:
                raise CorruptState(self.path, f'duplicate id {assigned_id}')
            seen.add(assigned_id)
            tasks.append(self._entry_to_task(raw, assigned_id, index))
        return tasks

    def _entry_to_task(self, raw: TaskEntry, task_id: int, index: int) -> Task:
        text = raw.get('text')
        if not isinstance(text, str) or not text.strip():
            raise CorruptState(self.path, f'entry {index} has no text')
        completed = raw.get('completed', False)
        if not isinstance(completed, bool):
            raise CorruptState(self.path, f'entry {index}: completed must be a boolean')
        created_raw = raw.get('created_at', raw.get('createdAt'))
        scheduled_raw = raw.get('scheduled_time', raw.get('scheduledTime'))
        try:
            created_at = _parse_instant(created_raw)
            scheduled = normalize_scheduled_time(scheduled_raw) if scheduled_raw is not None else None
            priority = Priority.coerce(raw.get('priority'))
        except (InvalidInput, ValueError, TypeError, AttributeError) as exc:
            raise CorruptState(self.path, f'entry {index}: {exc}') from exc
        return Task(
            id=task_id,
            text=text.strip(),
            completed=completed,
            created_at=created_at,
            scheduled_time=scheduled,
            priority=priority,
        )

    # -------------------- save --------------------
    def save(self, tasks: Sequence[Task]) -> None:
        """Write the full collection, replacing the previous snapshot atomically.

        Raises PersistenceUnavailable on any I/O failure; the old file is
        left intact in that case.
        """
        document = {'version': FORMAT_VERSION, 'tasks': [task_to_entry(t) for t in tasks]}
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f'.{self.path.name}.', suffix='.tmp', dir=self.path.parent)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=4, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            logger.warning('Saving %d tasks to %s failed: %s', len(tasks), self.path, exc)
            raise PersistenceUnavailable(self.path, str(exc), tasks) from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.debug('Could not remove temp file %s', tmp_name)
        logger.info('Saved %d tasks to %s', len(tasks), self.path)


# -------------------- serialization --------------------
def task_to_entry(task: Task) -> TaskEntry:
    return {
        'id': task.id,
        'text': task.text,
        'completed': task.completed,
        'created_at': task.created_at.isoformat(),
        'scheduled_time': task.scheduled_time,
        'priority': task.priority.value,
    }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_instant(raw: Any) -> datetime:
    """Parse an ISO timestamp; naive values and a trailing 'Z' mean UTC."""
    if not isinstance(raw, str):
        raise ValueError(f'created_at must be an ISO timestamp, got {raw!r}')
    text = raw.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
