"""Task state engine for a single-user to-do list.

The engine owns the task collection, its mutations, its JSON persistence
and the derivation of a display-ready (sorted, decorated) view. Rendering
itself is left to whatever front end drives a TodoList.
"""
from .errors import (
    TaskListError,
    InvalidInput,
    NotFound,
    CorruptState,
    PersistenceUnavailable,
)
from .models import Task, Priority
from .ordering import OrderingPolicy, sort_for_display
from .presentation import TaskView, decorate, glyph_for, priority_glyph_and_color, format_clock
from .storage import TaskRepository
from .operations import TaskOperations
from .todolist import TodoList

__all__ = [
    'TaskListError', 'InvalidInput', 'NotFound', 'CorruptState', 'PersistenceUnavailable',
    'Task', 'Priority', 'OrderingPolicy', 'sort_for_display',
    'TaskView', 'decorate', 'glyph_for', 'priority_glyph_and_color', 'format_clock',
    'TaskRepository', 'TaskOperations', 'TodoList',
]
