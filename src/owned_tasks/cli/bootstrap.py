# src/owned_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

Composition root: loads settings once and wires a TaskStore into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import ResourceTracker
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None, tracker: ResourceTracker | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    state = AppState(settings=settings, task_store=TaskStore(tracker=tracker))
    logger.debug("AppState created app=%s", getattr(settings, "app_name", "owned-tasks"))
    return state


def shutdown_state(state: AppState) -> None:
    """Close the store; releases every remaining task."""
    with state.lock:
        state.task_store.close()
