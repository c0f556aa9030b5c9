# src/devtasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The board and the editor depend on this Protocol instead of a concrete store,
so SQLite/HTTP backends stay swappable and tests can use in-memory fakes.
"""

from typing import Awaitable, Protocol

from ..tasks.task_models import Task, TaskInput


class TaskRepo(Protocol):
    """
    Task store contract consumed by the core.

    - list_all: every task, newest first (created_at descending)
    - create: raises ValidationError on an empty title
    - update_by_id: raises NotFoundError for an unknown id
    Transport failures raise TransportError.
    """

    def list_all(self) -> Awaitable[list[Task]]: ...

    def create(self, payload: TaskInput) -> Awaitable[Task]: ...

    def update_by_id(self, task_id: str, payload: TaskInput) -> Awaitable[Task]: ...
