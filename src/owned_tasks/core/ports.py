# src/owned_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store depends on Protocols instead of concrete implementations so that
instrumentation (leak checks in tests, counters in a host app) can be plugged
in without the store knowing about it.
"""

from typing import Protocol


class ResourceTracker(Protocol):
    """
    Observes task lifetimes inside a TaskStore.

    Contract:
    - acquired(task_id) is called exactly once per successful create
    - released(task_id) is called exactly once per task, on delete/take/clear/close
    """

    def acquired(self, task_id: int) -> None: ...

    def released(self, task_id: int) -> None: ...
