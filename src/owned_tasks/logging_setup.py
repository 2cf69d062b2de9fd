# src/owned_tasks/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "owned_tasks.log"

# Minimum level shown on the console per logger prefix; longest prefix wins.
# Per-operation store logs (create/update/delete at DEBUG) only go to the file.
CONSOLE_THRESHOLDS: dict[str, int] = {
    "owned_tasks.": logging.NOTSET,
    "owned_tasks.tasks.": logging.INFO,
    "py.warnings": logging.ERROR,
}
DEFAULT_CONSOLE_THRESHOLD = logging.ERROR


class ConsoleThresholdFilter(logging.Filter):
    def __init__(self, thresholds: dict[str, int] | None = None) -> None:
        super().__init__()
        table = CONSOLE_THRESHOLDS if thresholds is None else thresholds
        self._thresholds = sorted(table.items(), key=lambda kv: len(kv[0]), reverse=True)

    def threshold_for(self, name: str) -> int:
        for prefix, level in self._thresholds:
            if name.startswith(prefix):
                return level
        return DEFAULT_CONSOLE_THRESHOLD

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= self.threshold_for(record.name)


def setup_logging(
    *,
    log_dir: str | Path | None = ".local/owned_tasks",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Install the console handler (filtered) and, when log_dir is given, a
    file handler that keeps everything down to file_level.

    Replaces any handlers already on the root logger. Call once at startup.
    """
    root = logging.getLogger()
    root.setLevel(min(console_level, file_level))
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(ConsoleThresholdFilter())
    root.addHandler(console)

    if log_dir is not None:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(path / LOG_FILE_NAME), encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(fmt)
        root.addHandler(file_handler)

    logging.captureWarnings(True)
