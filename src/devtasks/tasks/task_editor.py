# src/devtasks/tasks/task_editor.py

from __future__ import annotations

"""
Task editor state machine.

    idle --open()--> editing --submit()--> submitting --ok--> idle
                        ^                       |
                        +-------- error --------+

close() returns to idle from any state. A submit() that is still in flight when
the editor is closed (or reopened) completes, but its result is dropped.

The editor never touches the task collection itself: a successful submit()
returns the canonical saved Task and the owner merges it (see TaskBoard).
"""

import logging
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Final

from ..core.ports import TaskRepo
from .errors import TaskError, ValidationError
from .task_models import Task, TaskInput, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)

TITLE_REQUIRED: Final = "Title is required."
GENERIC_FAILURE: Final = "Something went wrong."

EDITABLE_FIELDS: Final = ("title", "description", "status", "priority", "tags")


class EditorState(StrEnum):
    IDLE = "idle"
    EDITING = "editing"
    SUBMITTING = "submitting"


class EditorMode(StrEnum):
    CREATE = "create"
    EDIT = "edit"


def split_tags(raw: str) -> tuple[str, ...]:
    """Split "a, b,, c " into ("a", "b", "c")."""
    return tuple(t for t in (part.strip() for part in raw.split(",")) if t)


def join_tags(tags: tuple[str, ...]) -> str:
    return ", ".join(tags)


@dataclass(frozen=True, slots=True)
class EditorForm:
    """Raw form values as the user edits them (tags stay a comma-joined string)."""

    title: str = ""
    description: str = ""
    status: TaskStatus = TaskStatus.BACKLOG
    priority: TaskPriority = TaskPriority.MEDIUM
    tags: str = ""

    @classmethod
    def from_task(cls, task: Task) -> EditorForm:
        return cls(
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            tags=join_tags(task.tags),
        )

    def to_payload(self) -> TaskInput:
        return TaskInput(
            title=self.title.strip(),
            description=self.description.strip(),
            status=self.status,
            priority=self.priority,
            tags=split_tags(self.tags),
        )


def _parse_choice(raw: str, enum_cls: type[TaskStatus] | type[TaskPriority]):
    try:
        return enum_cls(raw.strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {enum_cls.__name__} {raw!r}. Use one of: {allowed}.") from None


class TaskEditor:
    """Create/edit form lifecycle for one modal instance."""

    def __init__(self, store: TaskRepo) -> None:
        self._store = store
        self.state = EditorState.IDLE
        self.mode: EditorMode | None = None
        self.task: Task | None = None
        self.form = EditorForm()
        self.error: str | None = None
        # Bumped on open()/close(); a submit only applies if it is unchanged.
        self._session = 0

    @property
    def is_open(self) -> bool:
        return self.state != EditorState.IDLE

    @property
    def heading(self) -> str:
        return "Edit Task" if self.mode == EditorMode.EDIT else "New Task"

    @property
    def submit_label(self) -> str:
        if self.state == EditorState.SUBMITTING:
            return "Saving..."
        return "Save" if self.mode == EditorMode.EDIT else "Create"

    def open(self, mode: EditorMode | str, task: Task | None = None) -> None:
        mode = EditorMode(mode)
        if mode == EditorMode.EDIT and task is None:
            raise ValueError("edit mode requires a task")

        self._session += 1
        self.mode = mode
        self.task = task if mode == EditorMode.EDIT else None
        self.form = EditorForm.from_task(task) if self.task is not None else EditorForm()
        self.error = None
        self.state = EditorState.EDITING
        logger.debug("Editor opened mode=%s task_id=%s", mode, getattr(task, "id", None))

    def close(self) -> None:
        if self.state == EditorState.SUBMITTING:
            logger.info("Editor closed while a save is in flight; its result will be dropped.")
        self._session += 1
        self.state = EditorState.IDLE
        self.mode = None
        self.task = None
        self.form = EditorForm()
        self.error = None

    def set_field(self, name: str, value: str) -> None:
        if self.state != EditorState.EDITING:
            raise RuntimeError(f"cannot edit fields while {self.state}")

        match name:
            case "title" | "description" | "tags":
                self.form = replace(self.form, **{name: value})
            case "status":
                self.form = replace(self.form, status=_parse_choice(value, TaskStatus))
            case "priority":
                self.form = replace(self.form, priority=_parse_choice(value, TaskPriority))
            case _:
                raise ValidationError(f"Unknown field {name!r}. Editable: {', '.join(EDITABLE_FIELDS)}.")

    async def submit(self) -> Task | None:
        """
        Validate and save the form.

        Returns the saved Task on success, None otherwise (validation error,
        store failure, a save already in flight, or the editor being closed
        while the request ran).
        """
        if self.state == EditorState.SUBMITTING:
            logger.debug("submit() ignored: a save is already in flight")
            return None
        if self.state != EditorState.EDITING:
            raise RuntimeError("submit() requires an open editor")

        self.error = None
        payload = self.form.to_payload()
        if not payload.title:
            self.error = TITLE_REQUIRED
            return None

        session = self._session
        mode = self.mode
        target = self.task
        self.state = EditorState.SUBMITTING

        try:
            if mode == EditorMode.CREATE:
                saved = await self._store.create(payload)
            else:
                assert target is not None
                saved = await self._store.update_by_id(target.id, payload)
        except Exception as exc:
            if isinstance(exc, TaskError):
                logger.warning("Task save failed mode=%s: %s", mode, exc)
            else:
                logger.exception("Unexpected error while saving task mode=%s", mode)
            if session != self._session:
                logger.info("Discarded failed save: editor was closed")
                return None
            self.error = str(exc) or GENERIC_FAILURE
            self.state = EditorState.EDITING
            return None

        if session != self._session:
            logger.info("Discarded saved task id=%s: editor was closed", saved.id)
            return None

        logger.info("Task saved id=%s mode=%s", saved.id, mode)
        self.close()
        return saved
