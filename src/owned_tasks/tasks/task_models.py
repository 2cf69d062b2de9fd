# src/owned_tasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass

from .task_errors import StaleViewError


@dataclass(frozen=True, slots=True)
class Task:
    """
    Immutable copy-out value of a task.

    A Task never refers back into the store: it stays valid (and unchanged)
    after the task is updated, deleted, or the store is closed.
    """

    id: int
    title: str
    done: bool = False


@dataclass(slots=True)
class TaskRecord:
    """Store-owned mutable record. Never handed to callers."""

    id: int
    title: str
    done: bool = False

    def snapshot(self) -> Task:
        return Task(id=self.id, title=self.title, done=self.done)


class TaskDraft:
    """
    Detached scratch copy passed to ``TaskStore.update`` mutators.

    - ``id`` is read-only
    - ``title`` / ``done`` may be assigned while the mutator runs
    - after the store commits (or discards) the draft it is sealed and
      further assignments raise StaleViewError
    """

    __slots__ = ("_id", "_title", "_done", "_sealed")

    def __init__(self, task_id: int, title: str, done: bool) -> None:
        self._id = task_id
        self._title = title
        self._done = done
        self._sealed = False

    @classmethod
    def from_record(cls, record: TaskRecord) -> TaskDraft:
        return cls(record.id, record.title, record.done)

    @property
    def id(self) -> int:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._ensure_open()
        self._title = value

    @property
    def done(self) -> bool:
        return self._done

    @done.setter
    def done(self, value: bool) -> None:
        self._ensure_open()
        self._done = value

    @property
    def sealed(self) -> bool:
        return self._sealed

    def seal(self) -> None:
        self._sealed = True

    def _ensure_open(self) -> None:
        if self._sealed:
            raise StaleViewError(
                f"draft for task {self._id} is sealed; use TaskStore.update again",
                task_id=self._id,
            )

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"TaskDraft(id={self._id}, title={self._title!r}, done={self._done}, {state})"
