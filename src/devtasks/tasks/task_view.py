# src/devtasks/tasks/task_view.py

"""
Read-only board projection: filter -> group -> labelled columns with counts.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from .task_filter import ALL, FilterCriteria, filter_tasks
from .task_grouper import BOARD_ORDER, group_by_status
from .task_models import Task, TaskPriority, TaskStatus

STATUS_LABELS: Final[dict[TaskStatus, str]] = {
    TaskStatus.BACKLOG: "Backlog",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}

PRIORITY_LABELS: Final[dict[TaskPriority, str]] = {
    TaskPriority.LOW: "Low",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.HIGH: "High",
}

# (value, label) pairs for the filter bar selects.
STATUS_FILTER_OPTIONS: Final[tuple[tuple[str, str], ...]] = (
    (ALL, "All Statuses"),
    *((s.value, STATUS_LABELS[s]) for s in TaskStatus),
)
PRIORITY_FILTER_OPTIONS: Final[tuple[tuple[str, str], ...]] = (
    (ALL, "All Priorities"),
    *((p.value, PRIORITY_LABELS[p]) for p in TaskPriority),
)


@dataclass(frozen=True, slots=True)
class ColumnView:
    status: TaskStatus
    label: str
    count: int
    tasks: tuple[Task, ...]


@dataclass(frozen=True, slots=True)
class BoardView:
    criteria: FilterCriteria
    columns: tuple[ColumnView, ...]

    @property
    def total(self) -> int:
        return sum(c.count for c in self.columns)

    def column(self, status: TaskStatus) -> ColumnView:
        for col in self.columns:
            if col.status == status:
                return col
        raise KeyError(status)


def build_board_view(tasks: Iterable[Task], criteria: FilterCriteria) -> BoardView:
    groups = group_by_status(filter_tasks(tasks, criteria))
    columns = tuple(
        ColumnView(
            status=status,
            label=STATUS_LABELS[status],
            count=len(groups[status]),
            tasks=tuple(groups[status]),
        )
        for status in BOARD_ORDER
    )
    return BoardView(criteria=criteria, columns=columns)
