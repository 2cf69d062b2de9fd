# tests/test_task_view.py

from __future__ import annotations

import pytest

from owned_tasks.tasks.task_errors import StaleViewError
from owned_tasks.tasks.task_models import Task, TaskDraft
from owned_tasks.tasks.task_store import TaskStore


def test_view_reads_current_state(store: TaskStore) -> None:
    task_id = store.create("Learn memory safety")
    view = store.get(task_id)

    assert view is not None
    assert view.is_valid
    assert view.id == task_id
    assert view.title == "Learn memory safety"
    assert view.done is False
    assert view.snapshot() == Task(id=task_id, title="Learn memory safety", done=False)


def test_view_is_rejected_after_delete(store: TaskStore) -> None:
    task_id = store.create("Learn C")
    view = store.get(task_id)
    assert view is not None
    assert view.title == "Learn C"

    store.delete(task_id)

    assert not view.is_valid
    with pytest.raises(StaleViewError) as exc_info:
        _ = view.title
    assert exc_info.value.task_id == task_id
    with pytest.raises(StaleViewError):
        view.snapshot()


def test_views_of_other_tasks_go_stale_after_delete(store: TaskStore) -> None:
    store.create("Task A")
    store.create("Task B")
    first = store.get(1)
    second = store.get(2)
    assert first is not None and second is not None

    store.delete(1)

    with pytest.raises(StaleViewError):
        _ = first.title
    with pytest.raises(StaleViewError):
        _ = second.title

    fresh = store.get(2)
    assert fresh is not None
    assert fresh.title == "Task B"


@pytest.mark.parametrize(
    "mutate",
    [
        lambda s, tid: s.create("another"),
        lambda s, tid: s.mark_done(tid),
        lambda s, tid: s.take(tid),
        lambda s, tid: s.clear(),
        lambda s, tid: s.close(),
    ],
    ids=["create", "update", "take", "clear", "close"],
)
def test_any_mutation_invalidates_views(store: TaskStore, mutate) -> None:
    task_id = store.create("watched")
    view = store.get(task_id)
    assert view is not None

    mutate(store, task_id)

    assert not view.is_valid
    with pytest.raises(StaleViewError):
        _ = view.done


def test_reads_do_not_invalidate_views(store: TaskStore) -> None:
    task_id = store.create("read only")
    view = store.get(task_id)
    assert view is not None

    store.get(task_id)
    store.snapshot(task_id)
    store.list_tasks()
    store.count_tasks()
    store.update(999, lambda d: None)
    store.delete(999)

    assert view.title == "read only"


def test_two_views_see_writes_only_through_update(store: TaskStore) -> None:
    store.create("Original title")
    view1 = store.get(1)
    view2 = store.get(1)
    assert view1 is not None and view2 is not None
    assert view1.title == view2.title == "Original title"

    def _rename(draft: TaskDraft) -> None:
        draft.title = "New title"

    store.update(1, _rename)

    # neither old alias can observe (or be confused by) the write
    for view in (view1, view2):
        with pytest.raises(StaleViewError):
            _ = view.title
    assert store.snapshot(1) == Task(id=1, title="New title", done=False)


def test_view_attributes_are_not_writable(store: TaskStore) -> None:
    task_id = store.create("immutable view")
    view = store.get(task_id)
    assert view is not None

    with pytest.raises(AttributeError):
        view.title = "nope"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        view.done = True  # type: ignore[misc]
    assert store.snapshot(task_id) == Task(id=task_id, title="immutable view", done=False)


def test_view_context_manager_releases_borrow(store: TaskStore) -> None:
    task_id = store.create("scoped")
    view = store.get(task_id)
    assert view is not None

    with view as borrowed:
        assert borrowed.title == "scoped"

    assert not view.is_valid
    with pytest.raises(StaleViewError):
        _ = view.title
    # releasing a borrow does not touch the task
    assert store.snapshot(task_id) == Task(id=task_id, title="scoped", done=False)


def test_stale_view_cannot_enter_context(store: TaskStore) -> None:
    task_id = store.create("late")
    view = store.get(task_id)
    assert view is not None
    store.delete(task_id)

    with pytest.raises(StaleViewError):
        with view:
            pass
