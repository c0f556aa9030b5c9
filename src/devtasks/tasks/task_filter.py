# src/devtasks/tasks/task_filter.py

"""
Task filter engine.

Pure functions only: the input sequence is never mutated and the output keeps
the input's relative order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final, Literal

from .errors import ValidationError
from .task_models import Task, TaskPriority, TaskStatus

ALL: Final = "ALL"

AllOption = Literal["ALL"]


def _parse_option(raw: str | None, enum_cls: type[TaskStatus] | type[TaskPriority]):
    value = (raw or ALL).strip().upper()
    if value == ALL:
        return ALL
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join([ALL, *(m.value for m in enum_cls)])
        raise ValidationError(f"Unknown {enum_cls.__name__} option {raw!r}. Use one of: {allowed}.") from None


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    status: TaskStatus | AllOption = ALL
    priority: TaskPriority | AllOption = ALL
    search_text: str = ""

    @classmethod
    def parse(
        cls,
        *,
        status: str | None = None,
        priority: str | None = None,
        search_text: str | None = None,
    ) -> FilterCriteria:
        """Build criteria from raw select/input values ("ALL" or an enum value)."""
        return cls(
            status=_parse_option(status, TaskStatus),
            priority=_parse_option(priority, TaskPriority),
            search_text=search_text or "",
        )

    @property
    def is_empty(self) -> bool:
        return self.status == ALL and self.priority == ALL and not self.search_text


def _search_haystack(task: Task) -> str:
    return f"{task.title} {task.description or ''}".casefold()


def matches(task: Task, criteria: FilterCriteria) -> bool:
    if criteria.status != ALL and task.status != criteria.status:
        return False

    if criteria.priority != ALL and task.priority != criteria.priority:
        return False

    needle = criteria.search_text
    if needle and needle.casefold() not in _search_haystack(task):
        return False

    return True


def filter_tasks(tasks: Iterable[Task], criteria: FilterCriteria) -> list[Task]:
    return [t for t in tasks if matches(t, criteria)]
