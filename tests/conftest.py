# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from types import SimpleNamespace

import pytest

from owned_tasks.core.state import AppState
from owned_tasks.tasks.task_store import TaskStore

from .fakes import FakeTracker


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the console.

    A SimpleNamespace rather than the real config keeps tests independent of
    the environment.
    """
    return SimpleNamespace(
        app_name="owned-tasks-test",
        log_level="DEBUG",
        log_to_file=False,
        log_dir=None,
        console_prompt="> ",
    )


@pytest.fixture()
def tracker() -> FakeTracker:
    return FakeTracker()


@pytest.fixture()
def store(tracker: FakeTracker) -> Iterator[TaskStore]:
    s = TaskStore(tracker=tracker)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore) -> AppState:
    return AppState(settings=settings, task_store=store)
