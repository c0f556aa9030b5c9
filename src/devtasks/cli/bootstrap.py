# src/devtasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the task store backend and wires board + editor into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import TaskRepo
from ..core.state import AppState
from ..tasks.http_store import HttpTaskStore
from ..tasks.task_board import TaskBoard
from ..tasks.task_editor import TaskEditor
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def build_task_store(settings) -> TaskRepo:
    backend = str(getattr(settings, "store_backend", "sqlite"))
    if backend == "http":
        logger.info("Using HTTP task store at %s", settings.api_base_url)
        return HttpTaskStore(settings.api_base_url, timeout=settings.http_timeout_seconds)
    return TaskStore(settings.tasks_db_path)


def create_initial_state(*, settings=None, task_store: TaskRepo | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and the store) injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    store = task_store if task_store is not None else build_task_store(settings)
    return AppState(
        settings=settings,
        task_store=store,
        board=TaskBoard(store),
        editor=TaskEditor(store),
    )


async def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    if state.editor.is_open:
        state.editor.close()

    # TaskStore uses short-lived sqlite connections per call; only the HTTP client needs closing.
    store = state.task_store
    if isinstance(store, HttpTaskStore):
        try:
            await store.aclose()
        except Exception:
            logger.debug("HTTP task store close failed.", exc_info=True)
