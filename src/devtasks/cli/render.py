# src/devtasks/cli/render.py

"""Plain-text rendering of the board projection and the editor form."""

from __future__ import annotations

from ..tasks.task_editor import TaskEditor
from ..tasks.task_filter import ALL, FilterCriteria
from ..tasks.task_models import Task
from ..tasks.task_view import PRIORITY_FILTER_OPTIONS, PRIORITY_LABELS, STATUS_FILTER_OPTIONS, BoardView

EMPTY_COLUMN = "No tasks in this column."
LOADING = "Loading tasks..."

_ID_WIDTH = 8


def _option_label(options: tuple[tuple[str, str], ...], value: str) -> str:
    for opt_value, label in options:
        if opt_value == value:
            return label
    return value


def render_criteria(criteria: FilterCriteria) -> str:
    status = _option_label(STATUS_FILTER_OPTIONS, str(criteria.status))
    priority = _option_label(PRIORITY_FILTER_OPTIONS, str(criteria.priority))
    search = criteria.search_text or "-"
    return f"Filters: {status} | {priority} | search: {search}"


def render_task(task: Task) -> list[str]:
    lines = [f"  [{task.id[:_ID_WIDTH]}] {task.title}  ({PRIORITY_LABELS[task.priority]})"]
    if task.description:
        lines.append(f"      {task.description}")
    if task.tags:
        lines.append("      " + " ".join(f"#{tag}" for tag in task.tags))
    return lines


def render_board(view: BoardView, *, loading: bool = False) -> str:
    if loading:
        return LOADING

    lines: list[str] = []
    if view.criteria.status != ALL or view.criteria.priority != ALL or view.criteria.search_text:
        lines.append(render_criteria(view.criteria))
        lines.append("")

    for column in view.columns:
        lines.append(f"{column.label} ({column.count})")
        if not column.tasks:
            lines.append(f"  {EMPTY_COLUMN}")
        for task in column.tasks:
            lines.extend(render_task(task))
        lines.append("")

    return "\n".join(lines).rstrip()


def render_editor(editor: TaskEditor) -> str:
    if not editor.is_open:
        return "No task is being edited. Use /new or /edit <id>."

    form = editor.form
    lines = [
        editor.heading,
        f"  title:       {form.title}",
        f"  description: {form.description}",
        f"  status:      {form.status.value}",
        f"  priority:    {form.priority.value}",
        f"  tags:        {form.tags}",
    ]
    if editor.error:
        lines.append(f"  ! {editor.error}")
    lines.append(f"Use /set <field> <value>, then /save ({editor.submit_label}) or /cancel.")
    return "\n".join(lines)
