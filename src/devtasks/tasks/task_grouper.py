# src/devtasks/tasks/task_grouper.py

from __future__ import annotations

from collections.abc import Iterable

from .errors import DataIntegrityError
from .task_models import Task, TaskStatus

BOARD_ORDER: tuple[TaskStatus, ...] = tuple(TaskStatus)


def group_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    """
    Partition tasks into the three board columns in one pass.

    Every column key is present (possibly empty) and each column keeps the
    input order. A status outside TaskStatus means the store-read boundary was
    bypassed and raises DataIntegrityError.
    """
    backlog: list[Task] = []
    in_progress: list[Task] = []
    done: list[Task] = []

    for task in tasks:
        match task.status:
            case TaskStatus.BACKLOG:
                backlog.append(task)
            case TaskStatus.IN_PROGRESS:
                in_progress.append(task)
            case TaskStatus.DONE:
                done.append(task)
            case other:
                raise DataIntegrityError(f"task {task.id} has unknown status {other!r}")

    return {
        TaskStatus.BACKLOG: backlog,
        TaskStatus.IN_PROGRESS: in_progress,
        TaskStatus.DONE: done,
    }
