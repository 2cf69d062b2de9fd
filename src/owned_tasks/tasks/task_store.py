# src/owned_tasks/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType

from ..core.ports import ResourceTracker
from .task_errors import StaleViewError, StoreClosedError
from .task_models import Task, TaskDraft, TaskRecord
from .task_view import TaskView

logger = logging.getLogger(__name__)

TaskMutator = Callable[[TaskDraft], object]


class TaskStore:
    """
    In-memory owning task store.

    Ownership rules:
    - the store is the only owner of task records; callers get either a
      TaskView (scoped borrow) or a Task (immutable copy), never the record
    - records are keyed by id in a dict, so deleting one task never moves
      or renumbers another
    - ids start at 1 and are never reused, even after delete/clear

    Every mutating call bumps the store generation, which invalidates all
    views issued before it.

    Lifetime:
    - close() (or leaving a ``with TaskStore() as store:`` block) releases
      every remaining task exactly once
    - after close() every operation raises StoreClosedError

    Not thread-safe: callers serialize access (see AppState.lock).
    """

    def __init__(self, *, tracker: ResourceTracker | None = None) -> None:
        self._tasks: dict[int, TaskRecord] = {}
        self._next_id = 1
        self._generation = 0
        self._closed = False
        self._tracker = tracker
        logger.info("TaskStore ready tracker=%s", type(tracker).__name__ if tracker else None)

    # ---- lifecycle ----

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def generation(self) -> int:
        return self._generation

    def close(self) -> None:
        """Release all tasks. Safe to call more than once."""
        if self._closed:
            return
        released = self._release_all()
        self._closed = True
        self._bump()
        logger.info("TaskStore closed released=%d next_id=%d", released, self._next_id)

    def __enter__(self) -> TaskStore:
        self._ensure_open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ---- low-level helpers ----

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreClosedError("TaskStore is closed")

    def _bump(self) -> None:
        self._generation += 1

    def _release(self, record: TaskRecord) -> None:
        if self._tracker is None:
            return
        try:
            self._tracker.released(record.id)
        except Exception:
            logger.exception("ResourceTracker.released failed task_id=%s", record.id)

    def _release_all(self) -> int:
        records = list(self._tasks.values())
        self._tasks.clear()
        for record in records:
            self._release(record)
        return len(records)

    def _lookup(self, task_id: object) -> TaskRecord | None:
        # bool is an int subclass; True must not alias task 1.
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            return None
        return self._tasks.get(task_id)

    def _is_live(self, task_id: int, generation: int, released: bool) -> bool:
        return (
            not released
            and not self._closed
            and generation == self._generation
            and task_id in self._tasks
        )

    def _read(self, task_id: int, generation: int, released: bool) -> TaskRecord:
        """Resolve a view's borrow or raise if it no longer holds."""
        if released:
            raise StaleViewError(f"view of task {task_id} was released", task_id=task_id)
        if self._closed:
            raise StaleViewError(f"view of task {task_id} outlived its store", task_id=task_id)
        if generation != self._generation:
            raise StaleViewError(
                f"view of task {task_id} is stale "
                f"(issued at generation {generation}, store at {self._generation})",
                task_id=task_id,
            )
        record = self._tasks.get(task_id)
        if record is None:
            raise StaleViewError(f"task {task_id} no longer exists", task_id=task_id)
        return record

    # ---- public API ----

    def count_tasks(self) -> int:
        self._ensure_open()
        return len(self._tasks)

    def __len__(self) -> int:
        return self.count_tasks()

    def __contains__(self, task_id: object) -> bool:
        self._ensure_open()
        return self._lookup(task_id) is not None

    def create(self, title: str) -> int:
        """Add a task with done=False and return its id."""
        self._ensure_open()
        if not isinstance(title, str):
            raise TypeError(f"title must be str, got {type(title).__name__}")

        task_id = self._next_id
        # Build and register first: a MemoryError or a failing tracker leaves
        # both the dict and the counter untouched.
        record = TaskRecord(id=task_id, title=title, done=False)
        if self._tracker is not None:
            self._tracker.acquired(task_id)

        self._tasks[task_id] = record
        self._next_id = task_id + 1
        self._bump()

        logger.debug("Task created id=%s title=%r", task_id, title)
        return task_id

    def get(self, task_id: int) -> TaskView | None:
        """Borrow a task read-only. None if absent."""
        self._ensure_open()
        if self._lookup(task_id) is None:
            return None
        return TaskView(self, task_id, self._generation)

    def snapshot(self, task_id: int) -> Task | None:
        """Copy a task out. None if absent."""
        self._ensure_open()
        record = self._lookup(task_id)
        return record.snapshot() if record is not None else None

    def list_tasks(self) -> list[Task]:
        """Snapshots of all tasks in creation order."""
        self._ensure_open()
        return [r.snapshot() for r in self._tasks.values()]

    def update(self, task_id: int, mutator: TaskMutator) -> bool:
        """
        Apply ``mutator`` to a detached draft of the task and commit it.

        Returns False (without calling the mutator) if the task is absent.
        If the mutator raises, or leaves the draft with invalid values,
        nothing is committed and the exception propagates.
        """
        self._ensure_open()
        record = self._lookup(task_id)
        if record is None:
            logger.debug("update: task not found id=%s", task_id)
            return False

        draft = TaskDraft.from_record(record)
        generation = self._generation
        try:
            mutator(draft)
        finally:
            draft.seal()

        if self._closed or generation != self._generation:
            raise StaleViewError(
                f"store changed while updating task {task_id}; nothing committed",
                task_id=task_id,
            )
        if not isinstance(draft.title, str):
            raise TypeError(f"title must be str, got {type(draft.title).__name__}")
        if not isinstance(draft.done, bool):
            raise TypeError(f"done must be bool, got {type(draft.done).__name__}")

        record.title = draft.title
        record.done = draft.done
        self._bump()
        logger.debug("Task updated id=%s done=%s", task_id, record.done)
        return True

    def mark_done(self, task_id: int, done: bool = True) -> bool:
        def _set(draft: TaskDraft) -> None:
            draft.done = done

        return self.update(task_id, _set)

    def delete(self, task_id: int) -> bool:
        """Remove and release a task. Returns whether anything was removed."""
        return self.take(task_id) is not None

    def take(self, task_id: int) -> Task | None:
        """Remove a task and hand its final state out as a value."""
        self._ensure_open()
        if self._lookup(task_id) is None:
            logger.debug("delete: task not found id=%s", task_id)
            return None

        record = self._tasks.pop(task_id)
        self._bump()
        self._release(record)
        logger.debug("Task deleted id=%s", task_id)
        return record.snapshot()

    def clear(self) -> int:
        """Release every task. The id counter keeps going."""
        self._ensure_open()
        released = self._release_all()
        self._bump()
        logger.debug("TaskStore cleared released=%d", released)
        return released

    def __repr__(self) -> str:
        if self._closed:
            return "TaskStore(closed)"
        return f"TaskStore(tasks={len(self._tasks)}, next_id={self._next_id})"
