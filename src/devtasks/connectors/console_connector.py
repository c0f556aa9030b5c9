# src/devtasks/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = "devtasks> "


async def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Interactive board REPL.

    Blocking reads run in a worker thread so store calls keep running on the
    event loop. Every command reply is written back; plain text is rejected.
    """
    logger.info("Console connector started.")
    app_name = str(getattr(state.settings, "app_name", "DevTasks Board"))
    write(f"{app_name}. Use /help for commands. Use /exit to quit.\n")

    while True:
        try:
            line = (await asyncio.to_thread(read_line, PROMPT)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await command_registry.handle(state, line)
        except Exception:
            logger.exception("Command failed: %s", line)
            write("Command failed. See the log file for details.")
            continue

        if reply is None:
            write("Commands start with '/'. Use /help to list them.")
        else:
            write(reply)
