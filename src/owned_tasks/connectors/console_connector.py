# src/owned_tasks/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def run_console_loop(
    state: AppState,
    *,
    read_line: InputFn = input,
    write: OutputFn = print,
) -> None:
    """
    Interactive REPL over the task store.

    Every line is a slash command; plain text is treated as "/add <text>".
    The loop ends on /exit, /quit, EOF or Ctrl+C.
    """
    logger.info("Console connector started.")
    prompt = str(getattr(state.settings, "console_prompt", ">>> "))
    write(f"[{_ts_local()}] Type /help for commands. Use /exit to quit.")

    def emit(text: str) -> None:
        write(f"[{_ts_local()}] {text}")

    while True:
        try:
            user_input = read_line(prompt).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            user_input = f"/add {user_input}"

        try:
            with state.lock:
                reply = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command failed: %s", user_input)
            write("Command failed, see log for details.")
            continue

        if reply:
            write(reply)
