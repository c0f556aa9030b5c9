# src/devtasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_board import TaskBoard
from ..tasks.task_editor import TaskEditor
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings object (devtasks.config.Settings or a test stand-in).
    settings: Any

    task_store: TaskRepo
    board: TaskBoard
    editor: TaskEditor
