# src/owned_tasks/config.py

"""Settings for the console front-end, loaded from environment variables (+ optional .env).

The store itself takes no configuration; these settings only cover
logging and the interactive console.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "OWNED_TASKS"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool
    log_dir: Path | None

    # ---- Console ----
    console_prompt: str

    @staticmethod
    def from_env() -> Settings:
        log_to_file = _env_bool(_k("LOG_TO_FILE"), True)
        return Settings(
            app_name=_env(_k("APP_NAME"), "owned-tasks") or "owned-tasks",
            log_level=_env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO",
            log_to_file=log_to_file,
            log_dir=_env_path(_k("LOG_DIR"), Path(".local/owned_tasks")) if log_to_file else None,
            console_prompt=_env(_k("CONSOLE_PROMPT"), ">>> "),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
