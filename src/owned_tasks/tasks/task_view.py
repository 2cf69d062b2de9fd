# src/owned_tasks/tasks/task_view.py

from __future__ import annotations

from typing import TYPE_CHECKING

from .task_models import Task

if TYPE_CHECKING:
    from .task_store import TaskStore


class TaskView:
    """
    Read-only borrow of one task, returned by ``TaskStore.get``.

    The view holds no reference to the stored record. Every read goes back
    through the store and is checked against the generation the view was
    issued at, so once the store is mutated (create/update/delete/clear/close)
    or the view is released, reads raise StaleViewError instead of returning
    data of a task that may no longer exist.

    Usable as a context manager:

        with store.get(task_id) as view:
            print(view.title)
    """

    __slots__ = ("_store", "_task_id", "_generation", "_released")

    def __init__(self, store: TaskStore, task_id: int, generation: int) -> None:
        self._store = store
        self._task_id = task_id
        self._generation = generation
        self._released = False

    @property
    def id(self) -> int:
        self._check()
        return self._task_id

    @property
    def title(self) -> str:
        return self._store._read(self._task_id, self._generation, self._released).title

    @property
    def done(self) -> bool:
        return self._store._read(self._task_id, self._generation, self._released).done

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_valid(self) -> bool:
        """True while reads through this view would succeed."""
        return self._store._is_live(self._task_id, self._generation, self._released)

    def snapshot(self) -> Task:
        """Copy the current state out into an independent Task value."""
        return self._store._read(self._task_id, self._generation, self._released).snapshot()

    def release(self) -> None:
        self._released = True

    def _check(self) -> None:
        self._store._read(self._task_id, self._generation, self._released)

    def __enter__(self) -> TaskView:
        self._check()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "live" if self.is_valid else "stale"
        return f"TaskView(id={self._task_id}, generation={self._generation}, {state})"

