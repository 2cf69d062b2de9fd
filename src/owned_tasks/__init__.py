"""Owning task collection with scoped, generation-checked views."""

from .tasks.task_errors import StaleViewError, StoreClosedError, TaskStoreError
from .tasks.task_models import Task, TaskDraft
from .tasks.task_store import TaskStore
from .tasks.task_view import TaskView

__all__ = [
    "StaleViewError",
    "StoreClosedError",
    "Task",
    "TaskDraft",
    "TaskStore",
    "TaskStoreError",
    "TaskView",
]
