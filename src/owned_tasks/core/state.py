# src/owned_tasks/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Everything the console and command handlers share.

    The store is single-threaded; anything that might touch it from more than
    one thread goes through ``lock``.
    """

    settings: object
    task_store: TaskStore
    lock: threading.Lock = field(default_factory=threading.Lock)
