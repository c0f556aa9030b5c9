# src/devtasks/tasks/errors.py

from __future__ import annotations


class TaskError(Exception):
    """Base class for every task-board failure (always scoped to one interaction)."""


class ValidationError(TaskError):
    """Input rejected before it reaches the store (empty title, unknown option)."""


class TransportError(TaskError):
    """A store call failed: network error or a non-success response."""


class NotFoundError(TransportError):
    """update_by_id target does not exist. Never retried as a create."""


class DataIntegrityError(TaskError):
    """A stored or received record carries a status/priority outside the enums."""
