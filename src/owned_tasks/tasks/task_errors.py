# src/owned_tasks/tasks/task_errors.py

from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for TaskStore errors (lookup misses are NOT errors)."""

    def __init__(self, message: str, task_id: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.task_id = task_id


class StaleViewError(TaskStoreError):
    """A view or draft was used after the store state it was bound to changed."""


class StoreClosedError(TaskStoreError):
    """The store was already closed; all of its tasks have been released."""
