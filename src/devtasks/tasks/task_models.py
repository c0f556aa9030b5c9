# src/devtasks/tasks/task_models.py

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from .errors import DataIntegrityError


class TaskStatus(StrEnum):
    """
    Board column a task lives in.

    Declaration order is the board order (left to right).
    """

    BACKLOG = "BACKLOG"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @classmethod
    def parse(cls, raw: Any) -> TaskStatus:
        """Strict conversion at the store-read boundary; no silent fallback."""
        try:
            return cls(raw)
        except ValueError:
            raise DataIntegrityError(f"unknown task status: {raw!r}") from None


class TaskPriority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def parse(cls, raw: Any) -> TaskPriority:
        try:
            return cls(raw)
        except ValueError:
            raise DataIntegrityError(f"unknown task priority: {raw!r}") from None


def normalize_tags(raw: Iterable[Any] | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(str(t) for t in raw)


@dataclass(frozen=True, slots=True)
class TaskInput:
    """
    Create/update payload sent to a task store.

    Only the mutable fields; id and timestamps belong to the store.
    """

    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.BACKLOG
    priority: TaskPriority = TaskPriority.MEDIUM
    tags: tuple[str, ...] = ()

    def to_wire(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "tags": list(self.tags),
        }


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    description: str = ""
    status: TaskStatus = TaskStatus.BACKLOG
    priority: TaskPriority = TaskPriority.MEDIUM
    tags: tuple[str, ...] = field(default_factory=tuple)

    # ISO-8601 strings assigned by the store; opaque sort keys for the core.
    created_at: str | None = None
    updated_at: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "tags": list(self.tags),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> Task:
        """
        Decode a JSON task payload.

        Accepts document-store payloads too:
        - "_id" in place of "id"
        - legacy "descrition" when "description" is absent
        Unknown status/priority values raise DataIntegrityError.
        """
        raw_id = data.get("id", data.get("_id"))
        if raw_id is None or str(raw_id) == "":
            raise DataIntegrityError("task payload has no id")

        if "description" in data:
            description = data.get("description")
        else:
            description = data.get("descrition")

        return cls(
            id=str(raw_id),
            title=str(data.get("title") or ""),
            description=str(description or ""),
            status=TaskStatus.parse(data.get("status", TaskStatus.BACKLOG.value)),
            priority=TaskPriority.parse(data.get("priority", TaskPriority.MEDIUM.value)),
            tags=normalize_tags(data.get("tags")),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )

    def to_input(self) -> TaskInput:
        return TaskInput(
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            tags=self.tags,
        )
